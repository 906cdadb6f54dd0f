"""
Enumeration definitions for the burst protection analytics service.

All enums inherit from both `str` and `Enum` to ensure JSON serialization
compatibility with Pydantic models, enabling automatic
serialization/deserialization in API responses.
"""

from enum import Enum


class BlockingStatus(str, Enum):
    """
    Whether burst protection throttled an account's spend on a given day.

    Values are the literals produced by the warehouse row query:
    an account-day is BLOCKED when its blocked spend amount is positive.
    """
    BLOCKED = "BLOCKED"
    NOT_BLOCKED = "NOT BLOCKED"


class TrendDirection(str, Enum):
    """
    Heuristic first-half vs second-half trend label for a KPI.

    - up: Second half mean exceeds the first half by at least the threshold
    - down: Second half mean trails the first half by at least the threshold
    - stable: Absolute difference is below the threshold
    """
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class SortField(str, Enum):
    """
    Closed set of telemetry row fields the dashboard table can sort by.

    Each member maps to an explicit key function in
    burst_analytics.services.sorting.
    """
    ADVERTISER_ID = "advertiser_id"
    AVG_DEPLETION_RATE = "avg_depletion_rate"
    SPIKES_COUNT = "spikes_count"
    FEATURE_DATE = "feature_date"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"
