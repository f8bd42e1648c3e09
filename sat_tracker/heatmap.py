"""Calendar heatmap of sats stacked per day"""
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Dict, List, Sequence

from sat_tracker.models.activity import DayData, WeekData, YearHeatmapData
from sat_tracker.models.transaction import BuyEvent

WEEKS_PER_GRID = 52

def intensity_level(sats: int, max_sats: int) -> int:
    """0 for no activity, otherwise 1-4 by quarter of the year's busiest day"""
    if sats <= 0:
        return 0
    if max_sats <= 0:
        return 1

    ratio = sats / max_sats
    if ratio <= 0.25:
        return 1
    elif ratio <= 0.5:
        return 2
    elif ratio <= 0.75:
        return 3
    return 4

def grid_start(year: int) -> date:
    """Sunday on or before January 1st"""
    jan_first = date(year, 1, 1)
    return jan_first - timedelta(days=(jan_first.weekday() + 1) % 7)

def daily_sats(events: Sequence[BuyEvent], year: int) -> Dict[str, int]:
    totals: Dict[str, int] = defaultdict(int)
    for event in events:
        if event.timestamp.year == year:
            totals[event.timestamp.date().isoformat()] += event.amount_sats
    return dict(totals)

def build_year(events: Sequence[BuyEvent], year: int) -> YearHeatmapData:
    """
    Fixed 52-week Sunday-aligned grid; days after the 364th from the
    grid start are not shown.
    """
    totals = daily_sats(events, year)
    max_sats = max(totals.values(), default=0)
    start = grid_start(year)

    weeks = []
    for week in range(WEEKS_PER_GRID):
        days = []
        for day in range(7):
            key = (start + timedelta(days=week * 7 + day)).isoformat()
            sats = totals.get(key, 0)
            days.append(DayData(date=key, sats=sats, level=intensity_level(sats, max_sats)))
        weeks.append(WeekData(days=days))

    return YearHeatmapData(year=year, weeks=weeks, max_sats=max_sats)

def build_heatmap(events: Sequence[BuyEvent], now: datetime) -> List[YearHeatmapData]:
    """One grid per year with buys plus the current year, most recent first"""
    years = {event.timestamp.year for event in events}
    years.add(now.year)
    return [build_year(events, year) for year in sorted(years, reverse=True)]
