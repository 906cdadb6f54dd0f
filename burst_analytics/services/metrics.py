"""
Dashboard metrics composition.

Runs every telemetry aggregation for one row query and assembles the result
the dashboard consumes. Daily aggregation always runs before the KPI step,
which reads the sorted daily sequence for its trend labels.
"""

import logging
from typing import Sequence

from burst_analytics.models import DashboardMetrics, TelemetryRow
from burst_analytics.services.aggregators import aggregate_by_account, aggregate_by_day
from burst_analytics.services.feature_impact import calculate_feature_impact
from burst_analytics.services.kpis import calculate_kpis

logger = logging.getLogger(__name__)


def calculate_metrics(rows: Sequence[TelemetryRow]) -> DashboardMetrics:
    """
    Compute daily metrics, account summaries, feature impact and KPIs.

    Args:
        rows: Validated telemetry rows. An empty sequence yields zero KPIs
            and empty collections.

    Returns:
        DashboardMetrics with freshly allocated values.
    """
    daily_metrics = aggregate_by_day(rows)
    account_summaries = aggregate_by_account(rows)
    feature_impact = calculate_feature_impact(rows)
    kpis = calculate_kpis(rows, daily_metrics)

    logger.info(
        f"Calculated dashboard metrics for {len(rows)} rows: "
        f"{len(daily_metrics)} days, {len(account_summaries)} accounts, "
        f"{len(feature_impact)} feature comparisons"
    )

    return DashboardMetrics(
        kpis=kpis,
        dailyMetrics=daily_metrics,
        accountSummaries=account_summaries,
        featureImpact=feature_impact,
    )
