"""
FastAPI dependency injection module for the burst protection analytics service.

Dependencies Provided:
- get_settings_dependency: Returns the cached Settings singleton
- SettingsDep: Type alias for injecting Settings into endpoints

Usage:
    @router.post("/metrics")
    async def compute_metrics(rows: List[TelemetryRow], settings: SettingsDep):
        ...
"""

from typing import Annotated

from fastapi import Depends

from burst_analytics.core.config import Settings, get_settings


def get_settings_dependency() -> Settings:
    """
    Return the application settings for endpoint injection.

    Tests can override this dependency through
    ``app.dependency_overrides[get_settings_dependency]``.
    """
    return get_settings()


SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]
