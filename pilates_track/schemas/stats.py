from pydantic import BaseModel
from typing import Dict, List, Optional
from datetime import date


class WorkoutStatsResponse(BaseModel):
    current_streak: int
    longest_streak: int
    last_workout_date: Optional[date] = None
    streak_start_date: Optional[date] = None
    total_workouts: int
    total_minutes: int
    weekly_minutes: int
    monthly_minutes: int
    total_calories: float
    focus_area_counts: Dict[str, int]
    workout_type_breakdown: Dict[str, int]
    average_rpe: Optional[float] = None
    weekly_progress: List[bool]

    class Config:
        from_attributes = True
