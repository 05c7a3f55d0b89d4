from typing import Any, Dict, Optional

from pilates_track.services.calorie_estimator import CalorieEstimator
from pilates_track.services.date_utils import date_only

TYPE_LABELS = {
    "reformer": "Reformer",
    "mat": "Mat",
    "tower": "Tower",
    "other": "Pilates",
}


def _type_value(log: Any) -> str:
    workout_type = log.workout_type
    return getattr(workout_type, "value", workout_type)


def format_date_label(value) -> str:
    day = date_only(value)
    return f"{day:%A}, {day:%b} {day.day}"


def location_name(log: Any) -> Optional[str]:
    return getattr(log, "custom_studio_name", None) or None


def default_caption(log: Any, current_streak: int = 0) -> str:
    """Подпись для шеринга: "45-min reformer workout at Studio\\n\\n3-day streak 🔥"."""
    parts = [f"{log.duration_minutes}-min {_type_value(log)} workout"]

    studio = location_name(log)
    if studio:
        parts.append(f"at {studio}")

    if current_streak > 1:
        parts.append(f"\n\n{current_streak}-day streak 🔥")

    return " ".join(parts)


def build_recap(log: Any, current_streak: int = 0) -> Dict[str, Any]:
    """Сводка одной тренировки для recap-карточки."""
    workout_type = _type_value(log)
    return {
        "log_id": log.id,
        "date_label": format_date_label(log.workout_date),
        "workout_type": workout_type,
        "type_label": TYPE_LABELS.get(workout_type, workout_type),
        "duration_minutes": log.duration_minutes,
        "rpe": log.rpe,
        "rpe_label": CalorieEstimator.rpe_label(log.rpe),
        "calorie_estimate": getattr(log, "calorie_estimate", None),
        "studio_name": location_name(log),
        "focus_areas": list(getattr(log, "focus_areas", None) or []),
        "image_url": getattr(log, "image_url", None),
        "current_streak": current_streak,
    }
