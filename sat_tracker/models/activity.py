"""Activity metrics response models"""
from typing import List, Optional
from pydantic import BaseModel

class DayData(BaseModel):
    """One heatmap cell"""
    date: str  # YYYY-MM-DD
    sats: int
    level: int  # 0-4 colour intensity

class WeekData(BaseModel):
    """Sunday-to-Saturday column of the heatmap"""
    days: List[DayData]

class YearHeatmapData(BaseModel):
    """52-week grid for one calendar year, scaled by its busiest day"""
    year: int
    weeks: List[WeekData]
    max_sats: int

class ActivityMetrics(BaseModel):
    """
    Stacking activity computed from the full Buy history.
    Recomputed on every query, never persisted.
    """
    current_streak_weeks: int = 0
    longest_streak_weeks: int = 0
    sats_stacked_this_year: int = 0
    consistency_score_percent: float = 0.0
    best_stacking_day: Optional[str] = None
    best_day_percentage: float = 0.0
    consistency_rating: str = "No Data"
    weeks_to_next_milestone: Optional[int] = None
    next_milestone_description: Optional[str] = None
    heatmap_data: List[YearHeatmapData] = []
