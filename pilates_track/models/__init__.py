from pilates_track.models.user import User, RoleEnum
from pilates_track.models.workout_log import WorkoutLog, WorkoutTypeEnum, FocusAreaEnum

__all__ = [
    "User", "RoleEnum",
    "WorkoutLog", "WorkoutTypeEnum", "FocusAreaEnum",
]
