"""
Settings and environment management module for the burst protection analytics service.

This module provides centralized configuration management using pydantic-settings,
which automatically loads settings from environment variables and .env files.

Key Features:
- Environment variable validation and type coercion
- Sensible defaults for development
- Singleton pattern via @lru_cache for efficient access

Environment Variables:
- APP_NAME: Display name used in the OpenAPI document
- LOG_LEVEL: Root logging level (default: INFO)
- HOST, PORT: Bind address for the standalone uvicorn server
- CORS_ORIGINS: JSON list of allowed dashboard origins
- MAX_ROWS_PER_REQUEST: Largest row/window list accepted by one request

Usage:
    from burst_analytics.core.config import get_settings

    settings = get_settings()
    limit = settings.max_rows_per_request
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The engine itself is configuration-free: trend thresholds are fixed
    policy constants in burst_analytics.services.kpis. Settings only shape
    the HTTP surface around it.

    Attributes:
        app_name: Title reported by the API root and OpenAPI document.
        log_level: Logging level name passed to logging.basicConfig.
        host: Interface the standalone server binds to.
        port: Port the standalone server listens on.
        cors_origins: Origins allowed to call the API from a browser.
        max_rows_per_request: Upper bound on the number of rows or windows
            accepted in a single request body.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',  # Ignore extra environment variables not defined in this class
        case_sensitive=False,
    )

    app_name: str = 'Burst Protection Analytics API'

    log_level: str = 'INFO'

    # Bind address when started with `python -m burst_analytics.main`
    host: str = '0.0.0.0'
    port: int = 8000

    # Next.js dashboard dev server
    cors_origins: List[str] = [
        'http://localhost:3000',
        'http://127.0.0.1:3000',
    ]

    # Mirrors the page size cap enforced on the warehouse row query
    max_rows_per_request: int = 10000


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings: The cached settings instance.

    Note:
        To refresh settings in tests, clear the cache:
        >>> get_settings.cache_clear()
    """
    return Settings()
