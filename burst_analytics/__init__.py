"""
Burst Protection Analytics Package.

FastAPI service layer for the burst protection reporting dashboard.
Turns validated telemetry rows and active usage windows into the daily
metrics, account summaries, feature impact comparisons, KPI trends and
window timelines the dashboard renders.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration and dependencies
    - models: Pydantic schemas and enums
    - services: Pure aggregation and interval-merging engine
"""

__version__ = "1.0.0"
