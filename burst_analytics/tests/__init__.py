'''
Burst Protection Analytics Test Suite

Test Modules:
-------------
- test_intervals.py: Interval merge laws and epoch conversion
- test_aggregators.py: Daily and per-account telemetry aggregation
- test_feature_impact.py: Pre/post feature split, exclusion and ranking
- test_kpis.py: Headline KPIs and trend threshold boundaries
- test_metrics.py: Dashboard metrics composition
- test_windows.py: Window filtering, daily merge and campaign grouping
- test_sorting.py: Row ordering over sortable columns
- test_api.py: FastAPI endpoint contracts
- test_config.py: Settings defaults and environment overrides

Running Tests:
--------------
    pip install -e ".[test]"
    pytest burst_analytics/tests/ -v

Configuration:
--------------
See conftest.py for shared fixtures and row/window factories.
'''

__all__ = []
