"""
Pydantic request/response models for the burst protection analytics service.

Input models (TelemetryRow, WindowRecord, Campaign) keep the warehouse column
names and are frozen: the engine never mutates what it is given. Derived
models keep the field names the dashboard charts bind to, so API responses
can be handed to the frontend unchanged.

Source references:
- Warehouse row query: description, advertiser_id, data_timestamp_by_request_time,
  feature_date, avg_depletion_rate, mac_avg, spikes_count, amount_of_blocking,
  blocking_status
- Window upload decoder: campaign_id, start_time, end_time, spend rates,
  window_duration_minutes

All models use Pydantic v2 syntax.
"""

from datetime import datetime, date as DateType
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from burst_analytics.models.enums import BlockingStatus, TrendDirection


# =============================================================================
# Input Models
# =============================================================================


class TelemetryRow(BaseModel):
    """
    One account-day of burst protection telemetry.

    `feature_date` is account-invariant: every row of one advertiser carries
    the same enablement date.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "description": "Acme Media",
                "advertiser_id": 1001,
                "data_timestamp_by_request_time": "2024-03-04T00:00:00",
                "feature_date": "2024-03-01",
                "avg_depletion_rate": 87.5,
                "mac_avg": 92.1,
                "spikes_count": 2,
                "amount_of_blocking": 130.0,
                "blocking_status": "BLOCKED"
            }
        }
    )

    description: str = Field(
        ...,
        description="Advertiser account display name"
    )
    advertiser_id: int = Field(
        ...,
        gt=0,
        description="Advertiser account identifier"
    )
    data_timestamp_by_request_time: datetime = Field(
        ...,
        description="Observation timestamp; grouped by its calendar day"
    )
    feature_date: DateType = Field(
        ...,
        description="Date burst protection was enabled for the account"
    )
    avg_depletion_rate: Optional[float] = Field(
        default=None,
        description="Mean percentage of expected daily budget spent"
    )
    mac_avg: Optional[float] = Field(
        default=None,
        description="Mean depletion rate of max-conversions campaigns"
    )
    spikes_count: Optional[int] = Field(
        default=None,
        ge=0,
        description="Qualifying spend spikes observed that day"
    )
    amount_of_blocking: Optional[float] = Field(
        default=None,
        ge=0.0,
        description="Spend amount blocked by burst protection"
    )
    blocking_status: BlockingStatus = Field(
        ...,
        description="BLOCKED when a positive amount was blocked"
    )


class WindowRecord(BaseModel):
    """
    A contiguous interval during which a campaign was actively spending.

    `window_duration_minutes` is supplied by the source and is not
    recomputed from the two instants.
    """
    model_config = ConfigDict(frozen=True)

    campaign_id: int = Field(..., description="Campaign identifier")
    start_time: datetime = Field(..., description="Window start instant")
    end_time: datetime = Field(..., description="Window end instant")
    avg_expected_hourly_spend: Optional[float] = Field(
        default=None,
        description="Expected hourly spend during the window"
    )
    avg_current_period_spend: Optional[float] = Field(
        default=None,
        description="Actual spend rate during the window"
    )
    window_duration_minutes: float = Field(
        ...,
        description="Window length in minutes as reported by the source"
    )


class Campaign(BaseModel):
    """Campaign roster entry used to attach display names to window summaries."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., gt=0)
    name: str
    advertiser_id: int = Field(..., gt=0)
    status: Optional[str] = None


class WindowFilters(BaseModel):
    """
    Optional narrowing of a window collection.

    Windows are kept when they overlap [startDate, endDate] and, when
    campaignIds is non-empty, belong to one of the listed campaigns.
    """
    startDate: Optional[datetime] = None
    endDate: Optional[datetime] = None
    campaignIds: Optional[List[int]] = None


# =============================================================================
# Telemetry Aggregates
# =============================================================================


class DailyMetric(BaseModel):
    """
    Metrics for one calendar day across all accounts present that day.

    Means ignore null inputs and are 0 when every input is null.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "date": "2024-03-04",
                "avgDepletionRate": 60.0,
                "macAvg": 30.0,
                "totalSpikes": 3,
                "totalBlocking": 5.0,
                "accountsBlocked": 1,
                "accountsTracked": 1
            }
        }
    )

    date: DateType = Field(..., description="Calendar day")
    avgDepletionRate: float = Field(
        default=0.0,
        description="Mean of non-null depletion rates"
    )
    macAvg: float = Field(
        default=0.0,
        description="Mean of non-null max-conversions depletion rates"
    )
    totalSpikes: int = Field(default=0, ge=0)
    totalBlocking: float = Field(default=0.0, ge=0.0)
    accountsBlocked: int = Field(
        default=0,
        ge=0,
        description="Rows with BLOCKED status"
    )
    accountsTracked: int = Field(
        default=0,
        ge=0,
        description="Distinct advertisers observed that day"
    )


class AccountSummary(BaseModel):
    """Per-advertiser rollup over every row of the account."""

    advertiser_id: int
    description: str
    feature_date: DateType
    daysActive: int = Field(
        ...,
        ge=1,
        description="Inclusive day span between first and last observation"
    )
    avgDepletionRate: float = 0.0
    macAvg: float = 0.0
    totalSpikes: int = 0
    blockingDays: int = 0
    blockingRate: float = Field(
        default=0.0,
        description="Blocked rows as a percentage of all rows"
    )
    totalBlockingAmount: float = 0.0


class FeatureImpact(BaseModel):
    """
    Before/after comparison around an account's feature enablement date.

    Rows on the feature date itself count as post-feature.
    """

    advertiser_id: int
    description: str
    preFeatureAvgDepletion: float
    postFeatureAvgDepletion: float
    preFeatureSpikes: int
    postFeatureSpikes: int
    improvementRate: float = Field(
        ...,
        description="(pre - post) / pre * 100, or 0 when pre is 0"
    )
    daysPreFeature: int = Field(..., ge=1)
    daysPostFeature: int = Field(..., ge=1)


class TrendSignals(BaseModel):
    depletionRate: TrendDirection = TrendDirection.STABLE
    spikes: TrendDirection = TrendDirection.STABLE


class KPIMetrics(BaseModel):
    """Headline numbers shown above the dashboard charts."""

    totalAccounts: int = 0
    accountsWithFeature: int = 0
    avgDepletionRate: float = 0.0
    totalSpikes: int = 0
    dailyAvgSpikes: float = 0.0
    blockingPercentage: float = 0.0
    totalBlockingAmount: float = 0.0
    trend: TrendSignals = Field(default_factory=TrendSignals)


class DashboardMetrics(BaseModel):
    """Everything the dashboard derives from one row query."""

    kpis: KPIMetrics
    dailyMetrics: List[DailyMetric] = Field(default_factory=list)
    accountSummaries: List[AccountSummary] = Field(default_factory=list)
    featureImpact: List[FeatureImpact] = Field(default_factory=list)


# =============================================================================
# Window Aggregates
# =============================================================================


class WindowDayMetric(BaseModel):
    """
    Active-window activity for one calendar day.

    windowCount counts every window touching the day, so a multi-day window
    is counted once per day. totalDuration is the merged coverage in minutes,
    where overlapping windows are counted once.
    """

    date: DateType
    windowCount: int = Field(..., ge=0)
    totalDuration: float = Field(..., ge=0.0, description="Merged active minutes")
    campaigns: List[int] = Field(
        default_factory=list,
        description="Distinct campaign ids active that day, ascending"
    )


class CampaignWindowSummary(BaseModel):
    """
    All windows of one campaign, ordered by start time.

    totalDuration sums the source-supplied window durations without merging,
    so overlapping windows of the same campaign are counted twice.
    """

    campaign_id: int
    campaign_name: Optional[str] = None
    windows: List[WindowRecord] = Field(default_factory=list)
    totalWindows: int = 0
    totalDuration: float = 0.0


class WindowTimelineSummary(BaseModel):
    """Footer totals shown under the campaign window timeline."""

    totalWindows: int = 0
    totalHours: float = 0.0
    avgWindowsPerCampaign: float = 0.0
    campaignCount: int = 0


# =============================================================================
# Request Bodies
# =============================================================================


class WindowQuery(BaseModel):
    """Request body for the window endpoints."""

    windows: List[WindowRecord] = Field(default_factory=list)
    campaigns: Optional[List[Campaign]] = None
    filters: Optional[WindowFilters] = None
