"""
Burst Protection Analytics Services

Pure, stateless aggregation engine. Every function takes in-memory
collections and returns newly allocated Pydantic values; none performs I/O
or keeps state between calls.

Services:
- intervals: Interval merging in epoch milliseconds
- aggregators: Daily and per-account telemetry aggregation
- feature_impact: Pre/post feature enablement comparison
- kpis: Headline KPIs and first-half vs second-half trend labels
- metrics: Composition of the telemetry views for one row query
- windows: Active window filtering and daily/campaign timelines
- sorting: Row ordering over a closed set of sortable columns

All services are consumed by the API layer (burst_analytics/api/).
"""

from burst_analytics.services.intervals import (
    TimeInterval,
    merge_intervals,
    total_duration_ms,
    to_epoch_ms,
    align_awareness,
)

from burst_analytics.services.aggregators import (
    aggregate_by_day,
    aggregate_by_account,
    mean_or_zero,
)

from burst_analytics.services.feature_impact import (
    calculate_feature_impact,
    improvement_rate,
)

from burst_analytics.services.kpis import (
    calculate_kpis,
    calculate_trends,
    classify_trend,
    DEPLETION_TREND_THRESHOLD,
    SPIKES_TREND_THRESHOLD,
)

from burst_analytics.services.metrics import calculate_metrics

from burst_analytics.services.windows import (
    filter_windows,
    aggregate_windows_by_day,
    aggregate_windows_by_campaign,
    campaign_display_name,
    summarize_window_timeline,
)

from burst_analytics.services.sorting import sort_rows

__all__ = [
    'TimeInterval',
    'merge_intervals',
    'total_duration_ms',
    'to_epoch_ms',
    'align_awareness',
    'aggregate_by_day',
    'aggregate_by_account',
    'mean_or_zero',
    'calculate_feature_impact',
    'improvement_rate',
    'calculate_kpis',
    'calculate_trends',
    'classify_trend',
    'DEPLETION_TREND_THRESHOLD',
    'SPIKES_TREND_THRESHOLD',
    'calculate_metrics',
    'filter_windows',
    'aggregate_windows_by_day',
    'aggregate_windows_by_campaign',
    'campaign_display_name',
    'summarize_window_timeline',
    'sort_rows',
]
