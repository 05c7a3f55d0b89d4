"""
Оценка калорий для пилатес-тренировок.

Это ОЦЕНКА по MET-значениям (Compendium of Physical Activities), а не измерение:
реальный расход зависит от состава тела, интенсивности и уровня подготовки.

Формула: калории = MET * коэффициент_RPE * вес(кг) * длительность(ч)
"""
import math
from typing import Optional

from pilates_track.core.config import settings


class CalorieEstimator:
    BASE_METS = {
        "mat": 3.0,
        "reformer": 3.5,
        "tower": 3.8,
        "other": 3.2,
    }

    RPE_LABELS = [
        (2, "Very light"),
        (4, "Light"),
        (6, "Moderate"),
        (8, "Hard"),
        (10, "All-out"),
    ]

    RPE_DESCRIPTIONS = [
        (2, "Easy breathing, could hold a conversation easily"),
        (4, "Slightly elevated breathing, comfortable pace"),
        (6, "Breathing harder, can speak in short sentences"),
        (8, "Heavy breathing, difficult to speak"),
        (10, "Maximum effort, unable to maintain for long"),
    ]

    @classmethod
    def intensity_multiplier(cls, rpe: int) -> float:
        # RPE 1 -> 0.84, RPE 5 -> 1.0, RPE 10 -> 1.2
        return 0.8 + (rpe / 10) * 0.4

    @classmethod
    def estimate(
        cls,
        duration_minutes: int,
        workout_type: str,
        rpe: int,
        weight_kg: Optional[float] = None,
    ) -> int:
        base_met = cls.BASE_METS.get(str(workout_type).lower(), cls.BASE_METS["other"])
        weight = weight_kg or settings.DEFAULT_WEIGHT_KG

        adjusted_met = base_met * cls.intensity_multiplier(rpe)
        calories = adjusted_met * weight * (duration_minutes / 60)
        return int(math.floor(calories + 0.5))

    @classmethod
    def _lookup(cls, table, rpe: int) -> str:
        for upper_bound, text in table:
            if rpe <= upper_bound:
                return text
        return table[-1][1]

    @classmethod
    def rpe_label(cls, rpe: int) -> str:
        return cls._lookup(cls.RPE_LABELS, rpe)

    @classmethod
    def rpe_description(cls, rpe: int) -> str:
        return cls._lookup(cls.RPE_DESCRIPTIONS, rpe)
