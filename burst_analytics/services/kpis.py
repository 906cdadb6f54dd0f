"""
KPI Calculation Service

Derives the dashboard's headline numbers from the raw rows and the already
computed daily aggregates.

Trend heuristic:
    The ascending daily sequence is split at floor(n / 2). The first half is
    days [0, mid), the second half days [mid, n), so with an odd number of
    days the extra day lands in the second half. The mean of each half is
    compared: the label is "stable" when the absolute difference is strictly
    below the threshold, otherwise "up" or "down" by sign.

    This is a fixed-threshold comparator, not a statistical test. The
    thresholds are policy constants and are not derived from the data.
"""

import logging
from typing import List, Sequence

from burst_analytics.models import (
    BlockingStatus,
    DailyMetric,
    KPIMetrics,
    TelemetryRow,
    TrendDirection,
    TrendSignals,
)
from burst_analytics.services.aggregators import day_key, mean_or_zero, sum_or_zero

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Percentage points of depletion rate
DEPLETION_TREND_THRESHOLD: float = 5.0

# Spikes per day
SPIKES_TREND_THRESHOLD: float = 1.0


# =============================================================================
# Trend Classification
# =============================================================================


def classify_trend(first_half_avg: float, second_half_avg: float, threshold: float) -> TrendDirection:
    """
    Label the change between two half-period means.

    Example:
        >>> classify_trend(50.0, 55.0, DEPLETION_TREND_THRESHOLD)
        <TrendDirection.UP: 'up'>
        >>> classify_trend(50.0, 54.9, DEPLETION_TREND_THRESHOLD)
        <TrendDirection.STABLE: 'stable'>
    """
    difference = second_half_avg - first_half_avg
    if abs(difference) < threshold:
        return TrendDirection.STABLE
    return TrendDirection.UP if difference > 0 else TrendDirection.DOWN


def split_halves(daily_metrics: Sequence[DailyMetric]):
    """Split the daily sequence at floor(n / 2) into (first, second)."""
    midpoint = len(daily_metrics) // 2
    return list(daily_metrics[:midpoint]), list(daily_metrics[midpoint:])


def calculate_trends(daily_metrics: Sequence[DailyMetric]) -> TrendSignals:
    """Trend labels for depletion rate and spike totals."""
    first_half, second_half = split_halves(daily_metrics)

    depletion = classify_trend(
        mean_or_zero(d.avgDepletionRate for d in first_half),
        mean_or_zero(d.avgDepletionRate for d in second_half),
        DEPLETION_TREND_THRESHOLD,
    )
    spikes = classify_trend(
        mean_or_zero(d.totalSpikes for d in first_half),
        mean_or_zero(d.totalSpikes for d in second_half),
        SPIKES_TREND_THRESHOLD,
    )
    return TrendSignals(depletionRate=depletion, spikes=spikes)


# =============================================================================
# KPI Calculation
# =============================================================================


def calculate_kpis(
    rows: Sequence[TelemetryRow],
    daily_metrics: Sequence[DailyMetric],
) -> KPIMetrics:
    """
    Compute headline KPIs and trend labels.

    Args:
        rows: The full row collection the daily metrics were built from.
        daily_metrics: Output of aggregate_by_day for the same rows.

    Returns:
        KPIMetrics. Every ratio is 0 when its denominator is empty.
    """
    total_accounts = len({r.advertiser_id for r in rows})
    total_spikes = sum_or_zero(r.spikes_count for r in rows)
    distinct_days = len({day_key(r) for r in rows})
    blocked_rows = sum(1 for r in rows if r.blocking_status == BlockingStatus.BLOCKED)

    kpis = KPIMetrics(
        totalAccounts=total_accounts,
        # The row query only returns accounts with burst protection configured
        accountsWithFeature=total_accounts,
        avgDepletionRate=mean_or_zero(r.avg_depletion_rate for r in rows),
        totalSpikes=total_spikes,
        dailyAvgSpikes=total_spikes / distinct_days if distinct_days > 0 else 0.0,
        blockingPercentage=(blocked_rows / len(rows)) * 100 if len(rows) > 0 else 0.0,
        totalBlockingAmount=float(sum_or_zero(r.amount_of_blocking for r in rows)),
        trend=calculate_trends(daily_metrics),
    )

    logger.debug(
        f"KPIs: {total_accounts} accounts, {distinct_days} days, "
        f"trend depletion={kpis.trend.depletionRate.value} spikes={kpis.trend.spikes.value}"
    )
    return kpis
