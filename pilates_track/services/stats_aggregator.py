import enum
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Sequence

from pilates_track.services.date_utils import date_only, start_of_week, end_of_week, start_of_month, week_days
from pilates_track.services.streak_calculator import compute_streaks, distinct_dates

logger = logging.getLogger(__name__)


@dataclass
class WorkoutStats:
    current_streak: int = 0
    longest_streak: int = 0
    last_workout_date: Optional[date] = None
    streak_start_date: Optional[date] = None
    total_workouts: int = 0
    total_minutes: int = 0
    weekly_minutes: int = 0
    monthly_minutes: int = 0
    total_calories: float = 0
    focus_area_counts: Dict[str, int] = field(default_factory=dict)
    workout_type_breakdown: Dict[str, int] = field(default_factory=dict)
    average_rpe: Optional[float] = None
    weekly_progress: List[bool] = field(default_factory=lambda: [False] * 7)


def _category(value: Any) -> str:
    if isinstance(value, enum.Enum):
        return value.value
    return str(value)


def round_rpe(value: float) -> float:
    """Округление до одного знака "по-школьному" (3.65 -> 3.7), а не банковское."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def compute_stats(logs: Sequence[Any], today: date) -> WorkoutStats:
    """
    Посчитать агрегированную статистику пользователя по всем его логам.

    logs — ORM-объекты WorkoutLog или любые объекты с теми же атрибутами.
    today передаётся явно, чтобы границы недели/месяца и стрик считались
    относительно одного и того же дня.
    """
    today = date_only(today)
    week_start, week_end = start_of_week(today), end_of_week(today)
    month_start = start_of_month(today)

    stats = WorkoutStats()
    if not logs:
        return stats

    logged_dates = []
    rpe_sum = 0
    rpe_count = 0

    for log in logs:
        workout_date = date_only(log.workout_date)
        duration = log.duration_minutes or 0
        logged_dates.append(workout_date)

        stats.total_workouts += 1
        stats.total_minutes += duration

        if week_start <= workout_date <= week_end:
            stats.weekly_minutes += duration

        if start_of_month(workout_date) == month_start:
            stats.monthly_minutes += duration

        calories = getattr(log, "calorie_estimate", None)
        if calories:
            stats.total_calories += calories

        rpe = getattr(log, "rpe", None)
        if rpe is not None:
            rpe_sum += rpe
            rpe_count += 1

        for area in getattr(log, "focus_areas", None) or []:
            key = _category(area)
            stats.focus_area_counts[key] = stats.focus_area_counts.get(key, 0) + 1

        workout_type = getattr(log, "workout_type", None)
        if workout_type is not None:
            key = _category(workout_type)
            stats.workout_type_breakdown[key] = stats.workout_type_breakdown.get(key, 0) + 1

    if rpe_count:
        stats.average_rpe = round_rpe(rpe_sum / rpe_count)

    date_set = set(logged_dates)
    stats.weekly_progress = [day in date_set for day in week_days(today)]

    streak = compute_streaks(distinct_dates(logged_dates), today)
    stats.current_streak = streak.current_streak
    stats.longest_streak = streak.longest_streak
    stats.last_workout_date = streak.last_workout_date
    stats.streak_start_date = streak.streak_start_date

    logger.debug(
        "Статистика посчитана: %s логов, текущий стрик %s, лучший %s",
        stats.total_workouts, stats.current_streak, stats.longest_streak,
    )
    return stats
