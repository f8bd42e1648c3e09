"""Stacking activity metrics: streaks, consistency, best day and milestones"""
import math
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence, Tuple

from sat_tracker.heatmap import build_heatmap
from sat_tracker.models.activity import ActivityMetrics
from sat_tracker.models.transaction import BuyEvent, ensure_utc
from sat_tracker.services.storage import StorageService

IsoWeek = Tuple[int, int]

WEEKDAY_NAMES = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')

# (streak weeks, label); 1 month, 2 months, 3 months, 6 months, 1 year
MILESTONES = (
    (4, "1-month streak"),
    (8, "2-month streak"),
    (12, "3-month streak"),
    (26, "6-month streak"),
    (52, "1-year streak"),
)

CONSISTENCY_WINDOW_WEEKS = 52

def iso_week(value: datetime) -> IsoWeek:
    year, week, _ = value.isocalendar()
    return year, week

def week_difference(later: IsoWeek, earlier: IsoWeek) -> int:
    """Approximate distance in weeks; assumes every ISO year has 52 weeks"""
    return (later[0] - earlier[0]) * 52 + (later[1] - earlier[1])

class ActivityCalculator:
    """Calculates stacking activity metrics from the Buy history"""

    def __init__(self, now: Optional[datetime] = None):
        self.now = ensure_utc(now) if now else datetime.now(timezone.utc)

    def calculate_weekly_streaks(self, dates: Sequence[datetime]) -> Tuple[int, int]:
        """
        Return (current streak, longest streak) in ISO weeks.

        Consecutive purchase weeks extend a streak. The current streak only
        counts when the last purchase was this week or last week.
        """
        if not dates:
            return 0, 0

        unique_weeks = sorted({iso_week(d) for d in dates})

        current_streak = 0
        if week_difference(iso_week(self.now), unique_weeks[-1]) <= 1:
            current_streak = 1
            for i in range(len(unique_weeks) - 2, -1, -1):
                if week_difference(unique_weeks[i + 1], unique_weeks[i]) <= 1:
                    current_streak += 1
                else:
                    break

        longest_streak = 0
        run = 1
        for previous, week in zip(unique_weeks, unique_weeks[1:]):
            if week_difference(week, previous) <= 1:
                run += 1
            else:
                longest_streak = max(longest_streak, run)
                run = 1
        longest_streak = max(longest_streak, run)

        return current_streak, longest_streak

    def calculate_best_stacking_day(self, dates: Sequence[datetime]) -> Tuple[Optional[str], float]:
        """Weekday with the most buys and its share of all buys, ties go to the earliest weekday"""
        if not dates:
            return None, 0.0

        day_counts = [0] * 7
        for d in dates:
            day_counts[d.weekday()] += 1

        max_count = max(day_counts)
        best_index = day_counts.index(max_count)
        return WEEKDAY_NAMES[best_index], max_count / len(dates) * 100

    def calculate_consistency_score(self, dates: Sequence[datetime]) -> float:
        """
        Weighted share of recent weeks with at least one buy, 0-100.

        The window covers up to 52 weeks back from now (fewer for short
        histories). Week weights decay from 1.0 towards 0.5 with age.
        """
        if not dates:
            return 0.0

        weeks_of_data = (self.now - min(dates)) // timedelta(weeks=1)
        window = min(CONSISTENCY_WINDOW_WEEKS, weeks_of_data + 1)
        if window <= 0:
            return 0.0

        purchase_weeks = {iso_week(d) for d in dates}

        weighted_score = 0.0
        total_weight = 0.0
        for offset in range(window):
            weight = 0.5 + 0.5 * math.exp(-0.05 * offset)
            if iso_week(self.now - timedelta(weeks=offset)) in purchase_weeks:
                weighted_score += weight
            total_weight += weight

        return weighted_score / total_weight * 100

    def consistency_rating(self, score: float) -> str:
        if score >= 80:
            return "Excellent"
        elif score >= 60:
            return "Good"
        elif score >= 40:
            return "Fair"
        return "Poor"

    def calculate_next_milestone(self, current_streak: int) -> Tuple[int, str]:
        """Weeks to go and label of the next streak milestone"""
        for milestone, description in MILESTONES:
            if current_streak < milestone:
                return milestone - current_streak, description

        # Past one year: next whole-year anniversary
        years = current_streak // 52 + 1
        return years * 52 - current_streak, f"{years}-year streak"

    def calculate(self, events: List[BuyEvent]) -> ActivityMetrics:
        """Compute the full metrics set from oldest-first Buy events"""
        if not events:
            return ActivityMetrics(consistency_rating="No Data")

        events = [BuyEvent(ensure_utc(e.timestamp), e.amount_sats) for e in events]
        dates = [e.timestamp for e in events]
        sats_this_year = sum(e.amount_sats for e in events if e.timestamp.year == self.now.year)

        current_streak, longest_streak = self.calculate_weekly_streaks(dates)
        best_day, best_day_percentage = self.calculate_best_stacking_day(dates)
        consistency_score = self.calculate_consistency_score(dates)
        weeks_to_milestone, milestone_description = self.calculate_next_milestone(current_streak)

        return ActivityMetrics(
            current_streak_weeks=current_streak,
            longest_streak_weeks=longest_streak,
            sats_stacked_this_year=sats_this_year,
            consistency_score_percent=consistency_score,
            best_stacking_day=best_day,
            best_day_percentage=best_day_percentage,
            consistency_rating=self.consistency_rating(consistency_score),
            weeks_to_next_milestone=weeks_to_milestone,
            next_milestone_description=milestone_description,
            heatmap_data=build_heatmap(events, self.now)
        )

def get_activity_metrics(store: StorageService, now: Optional[datetime] = None) -> ActivityMetrics:
    """Metrics query entry point: read every Buy and compute the metrics"""
    return ActivityCalculator(now).calculate(store.list_buy_events())
