"""
Tests for stacking activity metrics.
"""
import math
from datetime import datetime, timedelta, timezone

import pytest

from sat_tracker.activity import ActivityCalculator, get_activity_metrics, week_difference
from sat_tracker.models.transaction import BuyEvent, LogicalTransaction, TransactionType


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def calculator(now):
    return ActivityCalculator(now)


class TestWeekDifference:
    """ISO week arithmetic."""

    def test_same_year(self):
        assert week_difference((2025, 25), (2025, 23)) == 2

    def test_across_year_boundary(self):
        assert week_difference((2025, 1), (2024, 52)) == 1

    def test_53_week_year_counts_as_zero_gap(self):
        assert week_difference((2021, 1), (2020, 53)) == 0


class TestWeeklyStreaks:
    """Current and longest streaks."""

    def test_current_and_longest(self, calculator):
        dates = [
            utc(2025, 4, 22), utc(2025, 4, 29), utc(2025, 5, 6), utc(2025, 5, 13),
            utc(2025, 6, 3), utc(2025, 6, 10), utc(2025, 6, 17),
        ]
        assert calculator.calculate_weekly_streaks(dates) == (3, 4)

    def test_several_buys_in_one_week_count_once(self, calculator):
        dates = [utc(2025, 6, 16), utc(2025, 6, 17), utc(2025, 6, 18)]
        assert calculator.calculate_weekly_streaks(dates) == (1, 1)

    def test_buy_last_week_keeps_streak_alive(self, calculator):
        assert calculator.calculate_weekly_streaks([utc(2025, 6, 10)]) == (1, 1)

    def test_stale_streak_is_zero(self, calculator):
        dates = [utc(2025, 5, 27), utc(2025, 6, 3)]
        assert calculator.calculate_weekly_streaks(dates) == (0, 2)

    def test_streak_across_new_year(self, calculator):
        dates = [utc(2024, 12, 23), utc(2024, 12, 30)]
        assert calculator.calculate_weekly_streaks(dates) == (0, 2)

    def test_streak_through_53_week_year(self, calculator):
        # 2020-W52, 2020-W53, 2021-W01
        dates = [utc(2020, 12, 21), utc(2020, 12, 31), utc(2021, 1, 4)]
        assert calculator.calculate_weekly_streaks(dates) == (0, 3)

    def test_empty(self, calculator):
        assert calculator.calculate_weekly_streaks([]) == (0, 0)


class TestBestStackingDay:
    """Most frequent purchase weekday."""

    def test_tie_goes_to_earliest_weekday(self, calculator):
        dates = [utc(2025, 6, 13), utc(2025, 6, 6), utc(2025, 6, 16), utc(2025, 6, 9)]
        assert calculator.calculate_best_stacking_day(dates) == ("Monday", 50.0)

    def test_single_day(self, calculator):
        assert calculator.calculate_best_stacking_day([utc(2025, 6, 15)]) == ("Sunday", 100.0)

    def test_empty(self, calculator):
        assert calculator.calculate_best_stacking_day([]) == (None, 0.0)


class TestConsistencyScore:
    """Recency-weighted share of weeks with a buy."""

    def test_single_buy_this_week(self, calculator, now):
        assert calculator.calculate_consistency_score([now]) == 100.0

    def test_gap_week_weighted_by_age(self, calculator, now):
        score = calculator.calculate_consistency_score([utc(2025, 6, 4, 12), now])

        w1 = 0.5 + 0.5 * math.exp(-0.05)
        w2 = 0.5 + 0.5 * math.exp(-0.1)
        assert score == pytest.approx((1 + w2) / (1 + w1 + w2) * 100)

    def test_window_capped_at_one_year(self, calculator, now):
        # a single buy two years ago contributes nothing to the last 52 weeks
        assert calculator.calculate_consistency_score([utc(2023, 6, 14)]) == 0.0

    @pytest.mark.parametrize("score,rating", [
        (100.0, "Excellent"),
        (80.0, "Excellent"),
        (79.9, "Good"),
        (60.0, "Good"),
        (40.0, "Fair"),
        (39.99, "Poor"),
        (0.0, "Poor"),
    ])
    def test_rating(self, calculator, score, rating):
        assert calculator.consistency_rating(score) == rating


class TestNextMilestone:
    """Streak milestones."""

    @pytest.mark.parametrize("streak,expected", [
        (0, (4, "1-month streak")),
        (4, (4, "2-month streak")),
        (12, (14, "6-month streak")),
        (51, (1, "1-year streak")),
        (52, (52, "2-year streak")),
        (60, (44, "2-year streak")),
        (104, (52, "3-year streak")),
    ])
    def test_milestones(self, calculator, streak, expected):
        assert calculator.calculate_next_milestone(streak) == expected


class TestCalculate:
    """Full metric set."""

    def test_empty_history(self, calculator):
        metrics = calculator.calculate([])
        assert metrics.consistency_rating == "No Data"
        assert metrics.current_streak_weeks == 0
        assert metrics.best_stacking_day is None
        assert metrics.heatmap_data == []

    def test_sats_this_year(self, calculator):
        events = [
            BuyEvent(utc(2024, 12, 31, 23, 59), 1_000),
            BuyEvent(utc(2025, 1, 1), 2_000),
            BuyEvent(utc(2025, 6, 17), 3_000),
        ]
        metrics = calculator.calculate(events)

        assert metrics.sats_stacked_this_year == 5_000
        assert metrics.current_streak_weeks == 1
        assert metrics.weeks_to_next_milestone == 3
        assert [year.year for year in metrics.heatmap_data] == [2025, 2024]


class TestGetActivityMetrics:
    """Metrics read from the store."""

    def test_sells_are_ignored(self, store, now):
        store.insert_transaction(LogicalTransaction(TransactionType.BUY, 10_000, utc(2025, 6, 17)))
        store.insert_transaction(LogicalTransaction(TransactionType.SELL, 50_000, utc(2025, 6, 2)))

        metrics = get_activity_metrics(store, now)

        assert metrics.sats_stacked_this_year == 10_000
        assert metrics.longest_streak_weeks == 1
        assert metrics.best_stacking_day == "Tuesday"

    def test_empty_store(self, store, now):
        assert get_activity_metrics(store, now).consistency_rating == "No Data"


class TestOffsetTimestamps:
    """Events carrying a non-UTC offset are read as UTC everywhere."""

    PLUS_TWO = timezone(timedelta(hours=2))

    def test_heatmap_day_uses_utc_date(self, calculator):
        metrics = calculator.calculate([BuyEvent(datetime(2025, 3, 1, 1, 0, tzinfo=self.PLUS_TWO), 1_000)])

        filled = {
            day.date: day.sats
            for year in metrics.heatmap_data
            for week in year.weeks
            for day in week.days
            if day.sats
        }
        assert filled == {"2025-02-28": 1_000}
        assert metrics.best_stacking_day == "Friday"
        assert metrics.sats_stacked_this_year == 1_000

    def test_year_boundary_uses_utc_year(self, calculator):
        metrics = calculator.calculate([BuyEvent(datetime(2025, 1, 1, 1, 0, tzinfo=self.PLUS_TWO), 1_000)])

        assert metrics.sats_stacked_this_year == 0
        assert [(year.year, year.max_sats) for year in metrics.heatmap_data] == [(2025, 0), (2024, 1_000)]
