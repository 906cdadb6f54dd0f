"""
Test suite for daily and per-account telemetry aggregation.

Covers:
- The two-row single-day worked example
- Null handling: excluded from means, zero in sums, never NaN
- Exact-day grouping regardless of time of day
- Distinct account counting per day versus per dataset
- Sort order contracts and idempotence
"""

import math
from datetime import date

import pytest

from burst_analytics.models import DailyMetric
from burst_analytics.services.aggregators import (
    aggregate_by_account,
    aggregate_by_day,
    mean_or_zero,
    sum_or_zero,
)
from burst_analytics.tests.conftest import make_row


class TestMeanOrZero:

    def test_ignores_nulls(self):
        assert mean_or_zero([50.0, None, 70.0]) == 60.0

    def test_all_null_is_zero(self):
        assert mean_or_zero([None, None]) == 0.0

    def test_empty_is_zero(self):
        assert mean_or_zero([]) == 0.0


class TestSumOrZero:

    def test_integer_counts_stay_integers(self):
        total = sum_or_zero([2, None, 3])
        assert total == 5
        assert isinstance(total, int)

    def test_float_values(self):
        assert sum_or_zero([1.5, None, 2.0]) == pytest.approx(3.5)

    def test_empty_is_zero(self):
        assert sum_or_zero([]) == 0


class TestAggregateByDay:
    """aggregate_by_day groups rows per calendar day."""

    @pytest.mark.scenario
    def test_two_rows_same_day(self):
        rows = [
            make_row(1, 1, rate=50.0, mac=None, spikes=2, blocking=0.0, blocked=False),
            make_row(1, 1, rate=70.0, mac=30.0, spikes=1, blocking=5.0, blocked=True),
        ]

        metrics = aggregate_by_day(rows)

        assert metrics == [
            DailyMetric(
                date=date(2024, 3, 1),
                avgDepletionRate=60.0,
                macAvg=30.0,
                totalSpikes=3,
                totalBlocking=5.0,
                accountsBlocked=1,
                accountsTracked=1,
            )
        ]

    def test_empty_rows(self):
        assert aggregate_by_day([]) == []

    def test_all_null_numerics_degrade_to_zero(self):
        metrics = aggregate_by_day([make_row(1, 1), make_row(2, 1)])

        assert len(metrics) == 1
        metric = metrics[0]
        assert metric.avgDepletionRate == 0.0
        assert metric.macAvg == 0.0
        assert metric.totalSpikes == 0
        assert metric.totalBlocking == 0.0
        assert not math.isnan(metric.avgDepletionRate)

    def test_same_day_different_times_share_group(self):
        rows = [
            make_row(1, 5, hour=0, rate=10.0),
            make_row(2, 5, hour=23, rate=30.0),
        ]

        metrics = aggregate_by_day(rows)

        assert len(metrics) == 1
        assert metrics[0].date == date(2024, 3, 5)
        assert metrics[0].avgDepletionRate == pytest.approx(20.0)
        assert metrics[0].accountsTracked == 2

    def test_sorted_ascending_without_gap_filling(self):
        rows = [make_row(1, 9), make_row(1, 2), make_row(1, 5)]

        days = [m.date for m in aggregate_by_day(rows)]

        assert days == [date(2024, 3, 2), date(2024, 3, 5), date(2024, 3, 9)]

    def test_accounts_tracked_is_distinct_within_day(self, feature_rows):
        metrics = aggregate_by_day(feature_rows)

        assert [m.accountsTracked for m in metrics] == [1, 1, 2, 2]
        # Per-day distinct counts add up past the dataset-wide distinct count
        assert sum(m.accountsTracked for m in metrics) == 4 + 2
        assert len({r.advertiser_id for r in feature_rows}) == 2

    def test_repeated_account_rows_counted_once_per_day(self):
        rows = [make_row(7, 1, hour=h, blocked=True) for h in range(3)]

        metric = aggregate_by_day(rows)[0]

        assert metric.accountsTracked == 1
        assert metric.accountsBlocked == 3

    def test_feature_rows_values(self, feature_rows):
        metrics = aggregate_by_day(feature_rows)

        assert [m.avgDepletionRate for m in metrics] == pytest.approx([80.0, 90.0, 50.0, 50.0])
        assert [m.totalSpikes for m in metrics] == [3, 2, 2, 0]
        assert [m.totalBlocking for m in metrics] == [0.0, 10.0, 0.0, 0.0]
        assert [m.accountsBlocked for m in metrics] == [0, 1, 0, 0]

    def test_idempotent(self, feature_rows):
        first = aggregate_by_day(feature_rows)
        second = aggregate_by_day(feature_rows)

        assert first == second
        assert [m.model_dump() for m in first] == [m.model_dump() for m in second]
        assert first[0] is not second[0]


class TestAggregateByAccount:
    """aggregate_by_account rolls rows up per advertiser."""

    def test_empty_rows(self):
        assert aggregate_by_account([]) == []

    def test_feature_rows_summaries(self, feature_rows):
        summaries = aggregate_by_account(feature_rows)

        assert [s.advertiser_id for s in summaries] == [1, 2]

        first = summaries[0]
        assert first.description == "Advertiser 1"
        assert first.feature_date == date(2024, 3, 3)
        assert first.daysActive == 4
        assert first.avgDepletionRate == pytest.approx(70.0)
        assert first.macAvg == 0.0
        assert first.totalSpikes == 6
        assert first.blockingDays == 1
        assert first.blockingRate == pytest.approx(25.0)
        assert first.totalBlockingAmount == pytest.approx(10.0)

        second = summaries[1]
        assert second.daysActive == 2
        assert second.avgDepletionRate == pytest.approx(40.0)
        assert second.totalSpikes == 1
        assert second.blockingRate == 0.0

    def test_sorted_descending_by_depletion_rate(self):
        rows = [
            make_row(1, 1, rate=10.0),
            make_row(2, 1, rate=90.0),
            make_row(3, 1, rate=50.0),
        ]

        assert [s.advertiser_id for s in aggregate_by_account(rows)] == [2, 3, 1]

    def test_days_active_uses_calendar_days(self):
        rows = [
            make_row(1, 1, hour=23),
            make_row(1, 2, hour=1),
        ]

        assert aggregate_by_account(rows)[0].daysActive == 2

    def test_single_row_account_spans_one_day(self):
        assert aggregate_by_account([make_row(4, 6)])[0].daysActive == 1

    def test_description_from_first_row(self):
        rows = [
            make_row(1, 2, description="First"),
            make_row(1, 1, description="Second"),
        ]

        assert aggregate_by_account(rows)[0].description == "First"

    def test_blocking_rate_counts_rows(self):
        rows = [
            make_row(1, 1, blocked=True, blocking=3.0),
            make_row(1, 1, hour=12, blocked=True, blocking=2.0),
            make_row(1, 2),
            make_row(1, 3),
        ]

        summary = aggregate_by_account(rows)[0]

        assert summary.blockingDays == 2
        assert summary.blockingRate == pytest.approx(50.0)
        assert summary.totalBlockingAmount == pytest.approx(5.0)
