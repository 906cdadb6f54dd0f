"""
FastAPI router module for telemetry metrics endpoints.

Endpoints:
- POST /metrics: Daily metrics, account summaries, feature impact and KPIs
- POST /metrics/rows/sorted: Rows ordered for the dashboard data table

The rows are posted already validated against TelemetryRow; an empty list is
a valid request and yields zero KPIs and empty collections.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Query

from burst_analytics.core.dependencies import SettingsDep
from burst_analytics.models import (
    DashboardMetrics,
    SortField,
    SortOrder,
    TelemetryRow,
)
from burst_analytics.services.metrics import calculate_metrics
from burst_analytics.services.sorting import sort_rows

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/metrics")


def ensure_within_limit(count: int, limit: int, noun: str = "rows") -> None:
    """Reject request bodies larger than the configured limit with HTTP 413."""
    if count > limit:
        raise HTTPException(
            status_code=413,
            detail=f"Too many {noun}: {count} exceeds the limit of {limit}",
        )


@router.post("", response_model=DashboardMetrics)
async def compute_dashboard_metrics(
    rows: List[TelemetryRow],
    settings: SettingsDep,
) -> DashboardMetrics:
    """
    Compute every dashboard view for one row query.

    Args:
        rows: Telemetry rows returned by the warehouse query

    Returns:
        DashboardMetrics containing:
        - kpis: Headline totals and trend labels
        - dailyMetrics: One entry per observed day, ascending
        - accountSummaries: One entry per advertiser, by depletion rate desc
        - featureImpact: Pre/post comparisons, by improvement desc

    Raises:
        HTTPException 413: If more rows than max_rows_per_request are posted
        HTTPException 500: If the computation fails
    """
    ensure_within_limit(len(rows), settings.max_rows_per_request)

    try:
        return calculate_metrics(rows)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error computing dashboard metrics: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error computing dashboard metrics: {str(e)}",
        )


@router.post("/rows/sorted", response_model=List[TelemetryRow])
async def sort_telemetry_rows(
    rows: List[TelemetryRow],
    settings: SettingsDep,
    sort_by: SortField = Query(
        default=SortField.ADVERTISER_ID,
        description="Column to sort by",
    ),
    sort_order: SortOrder = Query(
        default=SortOrder.ASC,
        description="Sort direction",
    ),
) -> List[TelemetryRow]:
    """
    Order rows by one of the sortable columns; nulls are listed last.

    Raises:
        HTTPException 413: If more rows than max_rows_per_request are posted
        HTTPException 422: If sort_by is not a sortable column
        HTTPException 500: If sorting fails
    """
    ensure_within_limit(len(rows), settings.max_rows_per_request)

    try:
        return sort_rows(rows, sort_by, sort_order)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error sorting telemetry rows: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error sorting telemetry rows: {str(e)}",
        )
