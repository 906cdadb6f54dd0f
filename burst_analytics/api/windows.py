"""
FastAPI router module for active window timeline endpoints.

Endpoints:
- POST /windows/filter: Windows overlapping the range and campaign list
- POST /windows/daily: Per-day window counts and merged active minutes
- POST /windows/campaigns: Per-campaign windows with roster names
- POST /windows/timeline-summary: Footer totals for the campaign timeline

Every endpoint takes a WindowQuery body. Filters are applied before
aggregation, so the aggregated views only see the visible windows.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException

from burst_analytics.api.metrics import ensure_within_limit
from burst_analytics.core.dependencies import SettingsDep
from burst_analytics.models import (
    CampaignWindowSummary,
    WindowDayMetric,
    WindowQuery,
    WindowRecord,
    WindowTimelineSummary,
)
from burst_analytics.services.windows import (
    aggregate_windows_by_campaign,
    aggregate_windows_by_day,
    filter_windows,
    summarize_window_timeline,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/windows")


def _visible_windows(query: WindowQuery, limit: int) -> List[WindowRecord]:
    ensure_within_limit(len(query.windows), limit, noun="windows")
    return filter_windows(query.windows, query.filters)


@router.post("/filter", response_model=List[WindowRecord])
async def filter_window_records(query: WindowQuery, settings: SettingsDep) -> List[WindowRecord]:
    """Return the windows that pass the query's filters, in input order."""
    try:
        return _visible_windows(query, settings.max_rows_per_request)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error filtering windows: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error filtering windows: {str(e)}",
        )


@router.post("/daily", response_model=List[WindowDayMetric])
async def windows_by_day(query: WindowQuery, settings: SettingsDep) -> List[WindowDayMetric]:
    """
    Aggregate visible windows per calendar day.

    Raises:
        HTTPException 413: If more windows than max_rows_per_request are posted
        HTTPException 500: If the aggregation fails
    """
    try:
        windows = _visible_windows(query, settings.max_rows_per_request)
        return aggregate_windows_by_day(windows)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error aggregating windows by day: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error aggregating windows by day: {str(e)}",
        )


@router.post("/campaigns", response_model=List[CampaignWindowSummary])
async def windows_by_campaign(query: WindowQuery, settings: SettingsDep) -> List[CampaignWindowSummary]:
    """
    Group visible windows per campaign, most active campaign first.

    Raises:
        HTTPException 413: If more windows than max_rows_per_request are posted
        HTTPException 500: If the aggregation fails
    """
    try:
        windows = _visible_windows(query, settings.max_rows_per_request)
        return aggregate_windows_by_campaign(windows, query.campaigns)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error aggregating windows by campaign: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error aggregating windows by campaign: {str(e)}",
        )


@router.post("/timeline-summary", response_model=WindowTimelineSummary)
async def window_timeline_summary(query: WindowQuery, settings: SettingsDep) -> WindowTimelineSummary:
    """Totals shown under the campaign timeline for the visible windows."""
    try:
        windows = _visible_windows(query, settings.max_rows_per_request)
        return summarize_window_timeline(aggregate_windows_by_campaign(windows, query.campaigns))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error summarizing window timeline: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error summarizing window timeline: {str(e)}",
        )
