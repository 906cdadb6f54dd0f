"""
API package initialization.

This package contains FastAPI router modules for the analytics service:
- metrics: Telemetry dashboard metrics and row ordering
- windows: Active window filtering and timelines
"""

from fastapi import APIRouter

from burst_analytics.api.metrics import router as metrics_router
from burst_analytics.api.windows import router as windows_router

# Create main API router
api_router = APIRouter()

api_router.include_router(metrics_router, tags=["metrics"])  # metrics router has its own /metrics prefix
api_router.include_router(windows_router, tags=["windows"])  # windows router has its own /windows prefix

__all__ = [
    "api_router",
    "metrics_router",
    "windows_router",
]
