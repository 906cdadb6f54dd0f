"""
Telemetry Row Aggregation Service

Groups burst protection telemetry rows by calendar day and by advertiser and
computes the per-group metrics behind the daily trend charts and the account
table.

Per-group rules (both views):
- avgDepletionRate / macAvg: mean of non-null values, 0 when all are null
- totalSpikes / totalBlocking: sums with null counted as 0
- accountsBlocked / blockingDays: number of rows with BLOCKED status

Account view additionally:
- daysActive: (last observed day - first observed day) + 1
- blockingRate: blocked rows / all rows * 100

Grouping keys are exact calendar days (proleptic ordinals of the timestamp's
own date), so two observations on the same day at different times of day
fall into the same group. Results are always sorted explicitly before they
are returned: daily metrics ascending by day, account summaries descending
by mean depletion rate.

Dependencies:
    - pandas: DataFrame groupby with named aggregations
    - numpy: null-safe means for the Python-side helpers
"""

import logging
from collections import OrderedDict
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from burst_analytics.models import (
    AccountSummary,
    BlockingStatus,
    DailyMetric,
    TelemetryRow,
)

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Shared helpers
# =============================================================================

FRAME_COLUMNS: List[str] = [
    'advertiser_id',
    'day_key',
    'description',
    'feature_date',
    'avg_depletion_rate',
    'mac_avg',
    'spikes_count',
    'amount_of_blocking',
    'is_blocked',
]


def mean_or_zero(values: Iterable[Optional[float]]) -> float:
    """
    Arithmetic mean of the non-null values, or 0.0 when there are none.

    Example:
        >>> mean_or_zero([50.0, None, 70.0])
        60.0
        >>> mean_or_zero([None])
        0.0
    """
    present = [v for v in values if v is not None]
    if len(present) == 0:
        return 0.0
    return float(np.mean(np.array(present, dtype=np.float64)))


def sum_or_zero(values: Iterable[Optional[float]]) -> Union[int, float]:
    """Sum with null values counted as zero; integer inputs give an integer."""
    return sum((v for v in values if v is not None), 0)


def day_key(row: TelemetryRow) -> int:
    """Canonical grouping key for the calendar day of a row."""
    return row.data_timestamp_by_request_time.date().toordinal()


def group_rows_by_account(rows: Iterable[TelemetryRow]) -> Dict[int, List[TelemetryRow]]:
    """
    Group rows by advertiser id in a single pass.

    The mapping preserves first-seen order of advertisers and the input
    order of rows within each advertiser.
    """
    groups: Dict[int, List[TelemetryRow]] = OrderedDict()
    for row in rows:
        groups.setdefault(row.advertiser_id, []).append(row)
    return groups


def rows_to_frame(rows: Sequence[TelemetryRow]) -> pd.DataFrame:
    """
    Build the numeric DataFrame both grouping passes run on.

    Nullable numerics become float64 columns with NaN for missing values,
    which pandas' mean skips and sum treats as 0.
    """
    if len(rows) == 0:
        return pd.DataFrame(columns=FRAME_COLUMNS)

    return pd.DataFrame({
        'advertiser_id': pd.Series([r.advertiser_id for r in rows], dtype='int64'),
        'day_key': pd.Series([day_key(r) for r in rows], dtype='int64'),
        'description': [r.description for r in rows],
        'feature_date': [r.feature_date for r in rows],
        'avg_depletion_rate': pd.Series([r.avg_depletion_rate for r in rows], dtype='float64'),
        'mac_avg': pd.Series([r.mac_avg for r in rows], dtype='float64'),
        'spikes_count': pd.Series([r.spikes_count for r in rows], dtype='float64'),
        'amount_of_blocking': pd.Series([r.amount_of_blocking for r in rows], dtype='float64'),
        'is_blocked': pd.Series(
            [r.blocking_status == BlockingStatus.BLOCKED for r in rows],
            dtype='bool',
        ),
    })


# =============================================================================
# Daily aggregation
# =============================================================================


def aggregate_by_day(rows: Sequence[TelemetryRow]) -> List[DailyMetric]:
    """
    Aggregate telemetry rows into one DailyMetric per observed calendar day.

    Days without rows are not synthesized. accountsTracked is the number of
    distinct advertisers within that day, so summing it across days can
    exceed the dataset-wide distinct account count.

    Args:
        rows: Validated telemetry rows, in any order.

    Returns:
        New list of DailyMetric sorted ascending by date. Empty input
        yields an empty list.

    Example:
        >>> metrics = aggregate_by_day(rows)
        >>> metrics[0].avgDepletionRate
        60.0
    """
    frame = rows_to_frame(rows)
    if frame.empty:
        return []

    daily = frame.groupby('day_key', sort=True).agg(
        avgDepletionRate=('avg_depletion_rate', 'mean'),
        macAvg=('mac_avg', 'mean'),
        totalSpikes=('spikes_count', 'sum'),
        totalBlocking=('amount_of_blocking', 'sum'),
        accountsBlocked=('is_blocked', 'sum'),
        accountsTracked=('advertiser_id', 'nunique'),
    )
    # Groups whose values are all null produce NaN means
    daily[['avgDepletionRate', 'macAvg']] = daily[['avgDepletionRate', 'macAvg']].fillna(0.0)

    metrics = [
        DailyMetric(
            date=date.fromordinal(int(record.Index)),
            avgDepletionRate=float(record.avgDepletionRate),
            macAvg=float(record.macAvg),
            totalSpikes=int(record.totalSpikes),
            totalBlocking=float(record.totalBlocking),
            accountsBlocked=int(record.accountsBlocked),
            accountsTracked=int(record.accountsTracked),
        )
        for record in daily.itertuples()
    ]

    logger.debug(f"Aggregated {len(rows)} rows into {len(metrics)} daily metrics")
    return sorted(metrics, key=lambda m: m.date)


# =============================================================================
# Account aggregation
# =============================================================================


def aggregate_by_account(rows: Sequence[TelemetryRow]) -> List[AccountSummary]:
    """
    Aggregate telemetry rows into one AccountSummary per advertiser.

    Description and feature date are taken from the advertiser's first row.

    Args:
        rows: Validated telemetry rows, in any order.

    Returns:
        New list of AccountSummary sorted descending by avgDepletionRate.
        Ties keep ascending advertiser id order.
    """
    frame = rows_to_frame(rows)
    if frame.empty:
        return []

    accounts = frame.groupby('advertiser_id', sort=True).agg(
        description=('description', 'first'),
        feature_date=('feature_date', 'first'),
        firstDay=('day_key', 'min'),
        lastDay=('day_key', 'max'),
        avgDepletionRate=('avg_depletion_rate', 'mean'),
        macAvg=('mac_avg', 'mean'),
        totalSpikes=('spikes_count', 'sum'),
        blockingDays=('is_blocked', 'sum'),
        rowCount=('is_blocked', 'size'),
        totalBlockingAmount=('amount_of_blocking', 'sum'),
    )
    accounts[['avgDepletionRate', 'macAvg']] = accounts[['avgDepletionRate', 'macAvg']].fillna(0.0)

    summaries: List[AccountSummary] = []
    for record in accounts.itertuples():
        blocking_days = int(record.blockingDays)
        row_count = int(record.rowCount)
        summaries.append(
            AccountSummary(
                advertiser_id=int(record.Index),
                description=record.description,
                feature_date=record.feature_date,
                daysActive=int(record.lastDay) - int(record.firstDay) + 1,
                avgDepletionRate=float(record.avgDepletionRate),
                macAvg=float(record.macAvg),
                totalSpikes=int(record.totalSpikes),
                blockingDays=blocking_days,
                blockingRate=(blocking_days / row_count) * 100 if row_count > 0 else 0.0,
                totalBlockingAmount=float(record.totalBlockingAmount),
            )
        )

    logger.debug(f"Aggregated {len(rows)} rows into {len(summaries)} account summaries")
    return sorted(summaries, key=lambda s: s.avgDepletionRate, reverse=True)
