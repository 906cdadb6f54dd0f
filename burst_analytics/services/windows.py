"""
Active Window Timeline Service

Filters and aggregates the active usage windows uploaded for an advertiser's
campaigns into the two timeline views the dashboard renders.

Views:
    - By day: every window is split across the calendar days it touches.
      windowCount counts each window once per touched day (not
      deduplicated), while totalDuration is the merged coverage of the
      day's clipped intervals, so overlapping windows count once.
    - By campaign: windows grouped per campaign and ordered by start time.
      totalDuration sums the source-supplied window durations unmerged;
      this view reports raw usage volume rather than deduplicated presence.

Calendar days are those of the instants as given: naive datetimes are read
as local wall-clock time, aware datetimes use their own tzinfo. Where a
naive value meets an aware one (a window's two ends, or a window against a
filter date), the naive value is read as UTC.

Usage:
    from burst_analytics.services.windows import (
        filter_windows,
        aggregate_windows_by_day,
        aggregate_windows_by_campaign,
    )

    visible = filter_windows(windows, WindowFilters(campaignIds=[42]))
    daily = aggregate_windows_by_day(visible)
    by_campaign = aggregate_windows_by_campaign(visible, roster)
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Set

from burst_analytics.models import (
    Campaign,
    CampaignWindowSummary,
    WindowDayMetric,
    WindowFilters,
    WindowRecord,
    WindowTimelineSummary,
)
from burst_analytics.services.intervals import (
    TimeInterval,
    align_awareness,
    to_epoch_ms,
    total_duration_ms,
)

logger = logging.getLogger(__name__)

MS_PER_MINUTE: int = 60 * 1000


# =============================================================================
# Filtering
# =============================================================================


def filter_windows(
    windows: Iterable[WindowRecord],
    filters: Optional[WindowFilters] = None,
) -> List[WindowRecord]:
    """
    Keep the windows that overlap the date range and match the campaign list.

    A window is dropped only when it ends before startDate or starts after
    endDate; windows partially inside the range are kept whole. An absent
    or empty campaignIds list keeps every campaign.

    Args:
        windows: Window records to narrow.
        filters: Optional date range and campaign allow-list.

    Returns:
        New list with the retained windows in input order.
    """
    filters = filters or WindowFilters()
    allowed = set(filters.campaignIds) if filters.campaignIds else None

    kept: List[WindowRecord] = []
    for window in windows:
        if filters.startDate is not None and (
            window.end_time < align_awareness(filters.startDate, window.end_time)
        ):
            continue
        if filters.endDate is not None and (
            window.start_time > align_awareness(filters.endDate, window.start_time)
        ):
            continue
        if allowed is not None and window.campaign_id not in allowed:
            continue
        kept.append(window)
    return kept


# =============================================================================
# Daily aggregation
# =============================================================================


@dataclass
class _DayAccumulator:
    window_count: int = 0
    campaigns: Set[int] = field(default_factory=set)
    intervals: List[TimeInterval] = field(default_factory=list)


def _day_bounds(day: date, reference: datetime):
    """[midnight, next midnight) of a calendar day in the reference's timezone."""
    day_start = datetime.combine(day, time.min, tzinfo=reference.tzinfo)
    return day_start, day_start + timedelta(days=1)


def aggregate_windows_by_day(windows: Iterable[WindowRecord]) -> List[WindowDayMetric]:
    """
    Spread windows over the calendar days they touch and merge per day.

    For each day from the start's day to the end's day inclusive, the window
    is clipped to that day and the clipped interval joins the day's list.
    Each day's intervals are then merged and the covered time is reported
    in minutes.

    Returns:
        New list of WindowDayMetric sorted ascending by date.

    Edge Cases:
        - A zero-length window still yields one day entry
        - An inverted window (end before start) contributes nothing when it
          crosses midnight backwards, and zero minutes otherwise
    """
    days: Dict[date, _DayAccumulator] = {}

    for window in windows:
        start_time = window.start_time
        end_time = align_awareness(window.end_time, start_time)
        current = start_time.date()
        last_day = end_time.date()

        while current <= last_day:
            accumulator = days.setdefault(current, _DayAccumulator())
            accumulator.window_count += 1
            accumulator.campaigns.add(window.campaign_id)

            day_start, day_end = _day_bounds(current, start_time)
            overlap_start = max(start_time, day_start)
            overlap_end = min(end_time, day_end)
            accumulator.intervals.append(
                TimeInterval(to_epoch_ms(overlap_start), to_epoch_ms(overlap_end))
            )

            current += timedelta(days=1)

    metrics = [
        WindowDayMetric(
            date=day,
            windowCount=accumulator.window_count,
            totalDuration=total_duration_ms(accumulator.intervals) / MS_PER_MINUTE,
            campaigns=sorted(accumulator.campaigns),
        )
        for day, accumulator in days.items()
    ]

    logger.debug(f"Spread windows over {len(metrics)} days")
    return sorted(metrics, key=lambda m: m.date)


# =============================================================================
# Campaign aggregation
# =============================================================================


def _campaign_names(campaigns: Optional[Iterable[Campaign]]) -> Dict[int, str]:
    names: Dict[int, str] = {}
    for campaign in campaigns or []:
        # First roster entry wins for duplicate ids
        names.setdefault(campaign.id, campaign.name)
    return names


def aggregate_windows_by_campaign(
    windows: Iterable[WindowRecord],
    campaigns: Optional[Sequence[Campaign]] = None,
) -> List[CampaignWindowSummary]:
    """
    Group windows per campaign and attach roster names.

    Args:
        windows: Window records, in any order.
        campaigns: Optional campaign roster. Campaigns missing from it get
            campaign_name None; see campaign_display_name for the fallback.

    Returns:
        New list of CampaignWindowSummary sorted descending by totalWindows.
    """
    names = _campaign_names(campaigns)

    groups: Dict[int, List[WindowRecord]] = OrderedDict()
    for window in windows:
        groups.setdefault(window.campaign_id, []).append(window)

    summaries = [
        CampaignWindowSummary(
            campaign_id=campaign_id,
            campaign_name=names.get(campaign_id),
            windows=sorted(group, key=lambda w: w.start_time),
            totalWindows=len(group),
            totalDuration=sum(w.window_duration_minutes for w in group),
        )
        for campaign_id, group in groups.items()
    ]

    unmatched = sum(1 for s in summaries if s.campaign_name is None)
    if names and unmatched:
        logger.debug(f"{unmatched} campaigns with windows are missing from the roster")

    return sorted(summaries, key=lambda s: s.totalWindows, reverse=True)


def campaign_display_name(summary: CampaignWindowSummary) -> str:
    """Roster name of the campaign, or "Campaign <id>" when it has none."""
    return summary.campaign_name or f"Campaign {summary.campaign_id}"


def summarize_window_timeline(summaries: Sequence[CampaignWindowSummary]) -> WindowTimelineSummary:
    """
    Footer totals for the campaign timeline.

    Example:
        >>> summarize_window_timeline(aggregate_windows_by_campaign(windows)).totalHours
        7.0
    """
    total_windows = sum(s.totalWindows for s in summaries)
    campaign_count = len(summaries)
    return WindowTimelineSummary(
        totalWindows=total_windows,
        totalHours=sum(s.totalDuration for s in summaries) / 60,
        avgWindowsPerCampaign=total_windows / campaign_count if campaign_count > 0 else 0.0,
        campaignCount=campaign_count,
    )
