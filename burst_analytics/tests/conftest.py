"""
Pytest Configuration and Shared Fixtures for the analytics tests.

Provides:
- Factories building TelemetryRow and WindowRecord values with defaults
- Sample row sets spanning a feature enablement date
- Sample window sets with overlapping and multi-day windows
- A FastAPI TestClient with settings overridden per test
"""

from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from burst_analytics.core.config import Settings, get_settings
from burst_analytics.core.dependencies import get_settings_dependency
from burst_analytics.models import (
    BlockingStatus,
    Campaign,
    TelemetryRow,
    WindowRecord,
)


# ============================================================
# PYTEST HOOKS
# ============================================================

def pytest_configure(config) -> None:
    """
    Configure custom pytest markers for test organization.

    Custom markers defined:
    - scenario: Worked examples pinning exact dashboard numbers
    - api: Tests going through the FastAPI application
    """
    config.addinivalue_line(
        'markers',
        'scenario: worked examples pinning exact dashboard numbers'
    )
    config.addinivalue_line(
        'markers',
        'api: tests exercising the FastAPI application'
    )


# ============================================================
# FACTORIES
# ============================================================

BASE_DAY = date(2024, 3, 1)


def make_row(
    advertiser_id: int = 1,
    day: int = 1,
    *,
    hour: int = 0,
    rate: Optional[float] = None,
    mac: Optional[float] = None,
    spikes: Optional[int] = None,
    blocking: Optional[float] = None,
    blocked: bool = False,
    feature_day: int = 1,
    description: Optional[str] = None,
) -> TelemetryRow:
    """
    Build a TelemetryRow on day `day` of March 2024.

    `feature_day` is the day of March 2024 burst protection was enabled.
    """
    return TelemetryRow(
        description=description or f"Advertiser {advertiser_id}",
        advertiser_id=advertiser_id,
        data_timestamp_by_request_time=datetime(2024, 3, day, hour),
        feature_date=date(2024, 3, feature_day),
        avg_depletion_rate=rate,
        mac_avg=mac,
        spikes_count=spikes,
        amount_of_blocking=blocking,
        blocking_status=BlockingStatus.BLOCKED if blocked else BlockingStatus.NOT_BLOCKED,
    )


def make_window(
    campaign_id: int,
    start: datetime,
    end: datetime,
    duration_minutes: Optional[float] = None,
) -> WindowRecord:
    """Build a WindowRecord; the duration defaults to end - start in minutes."""
    if duration_minutes is None:
        duration_minutes = (end - start) / timedelta(minutes=1)
    return WindowRecord(
        campaign_id=campaign_id,
        start_time=start,
        end_time=end,
        avg_expected_hourly_spend=None,
        avg_current_period_spend=None,
        window_duration_minutes=duration_minutes,
    )


def row_payload(row: TelemetryRow) -> Dict[str, Any]:
    return row.model_dump(mode='json')


def window_payload(window: WindowRecord) -> Dict[str, Any]:
    return window.model_dump(mode='json')


# ============================================================
# SAMPLE DATA FIXTURES
# ============================================================

@pytest.fixture
def feature_rows() -> List[TelemetryRow]:
    """
    Two advertisers around a feature date of March 3rd.

    Advertiser 1: two days before (rates 80, 90), two days after (60, 50)
    Advertiser 2: only after the feature date
    """
    return [
        make_row(1, 1, rate=80.0, spikes=3, feature_day=3),
        make_row(1, 2, rate=90.0, spikes=2, blocking=10.0, blocked=True, feature_day=3),
        make_row(1, 3, rate=60.0, spikes=1, feature_day=3),
        make_row(1, 4, rate=50.0, spikes=0, feature_day=3),
        make_row(2, 3, rate=40.0, spikes=1, feature_day=3),
        make_row(2, 4, rate=None, spikes=None, feature_day=3),
    ]


@pytest.fixture
def campaign_roster() -> List[Campaign]:
    return [
        Campaign(id=10, name="Spring Sale", advertiser_id=1),
        Campaign(id=20, name="Brand", advertiser_id=1, status="RUNNING"),
    ]


@pytest.fixture
def sample_windows() -> List[WindowRecord]:
    """
    Campaign 10: two overlapping windows on March 1st plus one on March 3rd.
    Campaign 20: one window from March 1st 22:00 to March 2nd 02:00.
    """
    return [
        make_window(10, datetime(2024, 3, 1, 13), datetime(2024, 3, 1, 16)),
        make_window(10, datetime(2024, 3, 1, 10), datetime(2024, 3, 1, 14)),
        make_window(20, datetime(2024, 3, 1, 22), datetime(2024, 3, 2, 2)),
        make_window(10, datetime(2024, 3, 3, 9), datetime(2024, 3, 3, 9, 30)),
    ]


# ============================================================
# API FIXTURES
# ============================================================

@pytest.fixture
def test_settings() -> Settings:
    return Settings(max_rows_per_request=50)


@pytest.fixture
def client(test_settings: Settings):
    """TestClient with settings injected through dependency overrides."""
    from burst_analytics.main import app

    app.dependency_overrides[get_settings_dependency] = lambda: test_settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
