"""
Interval merging for active window timelines.

Merges overlapping or touching [start, end] intervals, expressed in epoch
milliseconds, into the minimal sorted set of disjoint intervals covering the
same instants. The merged duration (sum of end - start over the output) is
what the daily window view reports; the number of merges is not exposed.

Algorithm:
    1. Clamp inverted pairs (end < start) to zero length at start
    2. Sort ascending by start
    3. Single scan: extend the open interval while the next start is
       <= its end (touching intervals merge), otherwise open a new one

Usage:
    from burst_analytics.services.intervals import TimeInterval, merge_intervals

    merged = merge_intervals([TimeInterval(0, 5), TimeInterval(5, 10)])
    # [TimeInterval(start=0, end=10)]
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, List


_EPOCH_NAIVE = datetime(1970, 1, 1)
_EPOCH_UTC = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


@dataclass(frozen=True)
class TimeInterval:
    """Closed [start, end] span in epoch milliseconds."""
    start: int
    end: int

    @property
    def duration_ms(self) -> int:
        return max(self.end - self.start, 0)


def to_epoch_ms(value: datetime) -> int:
    """
    Convert a datetime to integer epoch milliseconds.

    Naive datetimes are read as wall-clock time so that a local calendar day
    always spans exactly 24 hours; aware datetimes are converted through UTC.
    """
    epoch = _EPOCH_NAIVE if value.tzinfo is None else _EPOCH_UTC
    return (value - epoch) // _ONE_MS


def align_awareness(value: datetime, reference: datetime) -> datetime:
    """
    Give `value` the same timezone awareness as `reference`.

    A naive datetime meeting an aware one is read as UTC, the same basis
    to_epoch_ms measures naive values on, so naive and aware instants can be
    compared and clipped together.

    Example:
        >>> align_awareness(datetime(2024, 3, 5), datetime(2024, 3, 1, tzinfo=timezone.utc))
        datetime.datetime(2024, 3, 5, 0, 0, tzinfo=datetime.timezone.utc)
    """
    if (value.tzinfo is None) == (reference.tzinfo is None):
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc).astimezone(reference.tzinfo)
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def merge_intervals(intervals: Iterable[TimeInterval]) -> List[TimeInterval]:
    """
    Merge intervals into a minimal, sorted, disjoint cover.

    Args:
        intervals: Any iterable of TimeInterval. The input is not modified.

    Returns:
        New list of TimeInterval sorted by start. Empty input yields [].

    Edge Cases:
        - Zero-length intervals participate normally
        - Inverted intervals contribute a zero-length point at their start
          rather than a negative duration

    Example:
        >>> merge_intervals([TimeInterval(0, 5), TimeInterval(6, 10)])
        [TimeInterval(start=0, end=5), TimeInterval(start=6, end=10)]
    """
    normalized = sorted(
        (TimeInterval(i.start, max(i.start, i.end)) for i in intervals),
        key=lambda i: (i.start, i.end),
    )
    if not normalized:
        return []

    merged: List[TimeInterval] = []
    current_start, current_end = normalized[0].start, normalized[0].end

    for interval in normalized[1:]:
        if interval.start <= current_end:
            current_end = max(current_end, interval.end)
        else:
            merged.append(TimeInterval(current_start, current_end))
            current_start, current_end = interval.start, interval.end

    merged.append(TimeInterval(current_start, current_end))
    return merged


def total_duration_ms(intervals: Iterable[TimeInterval]) -> int:
    """Total milliseconds covered by the union of the given intervals."""
    return sum(i.duration_ms for i in merge_intervals(intervals))
