"""
Календарные утилиты для трекера тренировок.

Все функции работают с календарными датами (datetime.date) без времени суток.
Неделя начинается с понедельника (ISO): индекс 0 в weekly_progress — понедельник.
"""
from datetime import date, datetime, timedelta
from typing import List, Union
from zoneinfo import ZoneInfo

DateLike = Union[date, datetime, str]


def date_only(value: DateLike) -> date:
    """Привести значение к календарной дате, отбросив время суток."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        # Допускаем как "2024-01-05", так и "2024-01-05T10:30:00"
        return date.fromisoformat(value[:10])
    raise TypeError(f"Ожидалась дата, получено: {type(value).__name__}")


def add_days(day: date, n: int) -> date:
    return day + timedelta(days=n)


def start_of_week(day: date) -> date:
    """Понедельник недели, содержащей day."""
    day = date_only(day)
    return day - timedelta(days=day.weekday())


def end_of_week(day: date) -> date:
    """Воскресенье недели, содержащей day."""
    return add_days(start_of_week(day), 6)


def start_of_month(day: date) -> date:
    day = date_only(day)
    return day.replace(day=1)


def week_days(day: date) -> List[date]:
    """Семь дат текущей недели: понедельник..воскресенье."""
    monday = start_of_week(day)
    return [add_days(monday, i) for i in range(7)]


def today_in(tz_name: str) -> date:
    """
    Текущая календарная дата в заданном часовом поясе.

    Вызывается один раз на запрос; дальше "сегодня" передаётся явно.
    """
    return datetime.now(ZoneInfo(tz_name)).date()
