from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from pilates_track.services.date_utils import DateLike, add_days, date_only


@dataclass(frozen=True)
class StreakResult:
    current_streak: int = 0
    longest_streak: int = 0
    last_workout_date: Optional[date] = None
    streak_start_date: Optional[date] = None


def distinct_dates(dates: Iterable[DateLike]) -> List[date]:
    """Уникальные календарные даты по возрастанию (несколько логов в день = один день)."""
    return sorted({date_only(d) for d in dates})


def compute_streaks(distinct_sorted_dates: List[date], today: date) -> StreakResult:
    """
    Посчитать текущий и самый длинный стрик.

    Правила:
    - день стрика = хотя бы одна тренировка в этот календарный день;
    - grace-период: текущий стрик жив, если последняя тренировка была сегодня или вчера;
    - на вход подаются уникальные даты по возрастанию.
    """
    if not distinct_sorted_dates:
        return StreakResult()

    today = date_only(today)
    last_workout_date = distinct_sorted_dates[-1]

    current_streak = 0
    streak_start_date = None
    if last_workout_date in (today, add_days(today, -1)):
        date_set = set(distinct_sorted_dates)
        day = last_workout_date
        while day in date_set:
            current_streak += 1
            streak_start_date = day
            day = add_days(day, -1)

    longest_streak = 1
    running = 1
    for prev, curr in zip(distinct_sorted_dates, distinct_sorted_dates[1:]):
        if (curr - prev).days == 1:
            running += 1
            longest_streak = max(longest_streak, running)
        else:
            running = 1

    return StreakResult(
        current_streak=current_streak,
        longest_streak=longest_streak,
        last_workout_date=last_workout_date,
        streak_start_date=streak_start_date,
    )
