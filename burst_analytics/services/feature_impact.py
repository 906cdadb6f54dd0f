"""
Feature Impact Analysis Service

Compares each advertiser's depletion rate and spike volume before and after
burst protection was enabled on the account.

Split rule:
    pre  = rows observed on a day strictly before feature_date
    post = rows observed on or after feature_date

Because feature_date is a calendar date, a timestamp is "before" the
enablement exactly when its own calendar day is earlier. Accounts with no
rows on one side of the split have no valid comparison and are dropped.

improvementRate = (pre_avg - post_avg) / pre_avg * 100, defined as 0 when
pre_avg is 0. A positive value means the depletion rate fell after
enablement; results are ranked by it, largest first.
"""

import logging
from typing import List, Sequence

from burst_analytics.models import FeatureImpact, TelemetryRow
from burst_analytics.services.aggregators import (
    group_rows_by_account,
    mean_or_zero,
    sum_or_zero,
)

logger = logging.getLogger(__name__)


def improvement_rate(pre_avg: float, post_avg: float) -> float:
    """
    Relative reduction of the depletion rate, in percent.

    Example:
        >>> improvement_rate(80.0, 60.0)
        25.0
        >>> improvement_rate(0.0, 60.0)
        0.0
    """
    if pre_avg > 0:
        return ((pre_avg - post_avg) / pre_avg) * 100
    return 0.0


def calculate_feature_impact(rows: Sequence[TelemetryRow]) -> List[FeatureImpact]:
    """
    Compute the pre/post feature comparison for every eligible advertiser.

    Args:
        rows: Validated telemetry rows, in any order.

    Returns:
        New list of FeatureImpact sorted descending by improvementRate.
        Advertisers lacking pre-feature or post-feature rows are excluded.
    """
    impacts: List[FeatureImpact] = []

    for advertiser_id, account_rows in group_rows_by_account(rows).items():
        first_row = account_rows[0]
        feature_date = first_row.feature_date

        pre_rows = [
            r for r in account_rows
            if r.data_timestamp_by_request_time.date() < feature_date
        ]
        post_rows = [
            r for r in account_rows
            if r.data_timestamp_by_request_time.date() >= feature_date
        ]

        if not pre_rows or not post_rows:
            continue

        pre_avg = mean_or_zero(r.avg_depletion_rate for r in pre_rows)
        post_avg = mean_or_zero(r.avg_depletion_rate for r in post_rows)

        impacts.append(
            FeatureImpact(
                advertiser_id=advertiser_id,
                description=first_row.description,
                preFeatureAvgDepletion=pre_avg,
                postFeatureAvgDepletion=post_avg,
                preFeatureSpikes=sum_or_zero(r.spikes_count for r in pre_rows),
                postFeatureSpikes=sum_or_zero(r.spikes_count for r in post_rows),
                improvementRate=improvement_rate(pre_avg, post_avg),
                daysPreFeature=len(pre_rows),
                daysPostFeature=len(post_rows),
            )
        )

    logger.debug(f"Computed feature impact for {len(impacts)} advertisers")
    return sorted(impacts, key=lambda i: i.improvementRate, reverse=True)
