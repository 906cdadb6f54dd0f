"""
Package initialization file for burst_analytics models.

Exports all Pydantic schemas and enumerations from schemas.py and enums.py
so other modules can import them from burst_analytics.models directly.

Usage:
    from burst_analytics.models import TelemetryRow, DailyMetric, BlockingStatus
"""

from burst_analytics.models.enums import (
    BlockingStatus,
    TrendDirection,
    SortField,
    SortOrder,
)

from burst_analytics.models.schemas import (
    # Input models
    TelemetryRow,
    WindowRecord,
    Campaign,
    WindowFilters,
    # Telemetry aggregates
    DailyMetric,
    AccountSummary,
    FeatureImpact,
    TrendSignals,
    KPIMetrics,
    DashboardMetrics,
    # Window aggregates
    WindowDayMetric,
    CampaignWindowSummary,
    WindowTimelineSummary,
    # Request bodies
    WindowQuery,
)

__all__ = [
    'BlockingStatus',
    'TrendDirection',
    'SortField',
    'SortOrder',
    'TelemetryRow',
    'WindowRecord',
    'Campaign',
    'WindowFilters',
    'DailyMetric',
    'AccountSummary',
    'FeatureImpact',
    'TrendSignals',
    'KPIMetrics',
    'DashboardMetrics',
    'WindowDayMetric',
    'CampaignWindowSummary',
    'WindowTimelineSummary',
    'WindowQuery',
]
