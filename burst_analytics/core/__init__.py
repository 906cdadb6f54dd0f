"""
Core infrastructure package for the burst protection analytics service.

Provides:
- Configuration management via pydantic-settings
- FastAPI dependency injection utilities

Re-exports allow simplified imports such as:

    from burst_analytics.core import get_settings, SettingsDep
"""

from burst_analytics.core.config import Settings, get_settings
from burst_analytics.core.dependencies import (
    get_settings_dependency,
    SettingsDep,
)

__all__ = [
    'Settings',
    'get_settings',
    'get_settings_dependency',
    'SettingsDep',
]
