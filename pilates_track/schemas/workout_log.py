from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import date, datetime

from pilates_track.models.workout_log import WorkoutTypeEnum as WorkoutType, FocusAreaEnum as FocusArea


def _lower(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _unique(values):
    if values is None:
        return values
    unique = []
    for value in values:
        if value not in unique:
            unique.append(value)
    return unique


class WorkoutLogCreate(BaseModel):
    workout_date: Optional[date] = None
    duration_minutes: int = Field(ge=1, le=180, description="Workout duration in minutes (1-180)")
    workout_type: WorkoutType
    rpe: int = Field(ge=1, le=10, description="Rate of perceived exertion (1-10)")
    focus_areas: List[FocusArea] = []
    notes: Optional[str] = None
    studio_id: Optional[str] = None
    custom_studio_name: Optional[str] = None
    session_id: Optional[str] = None
    image_url: Optional[str] = None
    calorie_estimate: Optional[float] = Field(default=None, ge=0)

    @field_validator("workout_type", mode="before")
    @classmethod
    def normalize_workout_type(cls, value):
        return _lower(value)

    @field_validator("focus_areas")
    @classmethod
    def dedupe_focus_areas(cls, value):
        return _unique(value)


class WorkoutLogUpdate(BaseModel):
    workout_date: Optional[date] = None
    duration_minutes: Optional[int] = Field(default=None, ge=1, le=180)
    workout_type: Optional[WorkoutType] = None
    rpe: Optional[int] = Field(default=None, ge=1, le=10)
    focus_areas: Optional[List[FocusArea]] = None
    notes: Optional[str] = None
    studio_id: Optional[str] = None
    custom_studio_name: Optional[str] = None
    image_url: Optional[str] = None
    calorie_estimate: Optional[float] = Field(default=None, ge=0)

    @field_validator("workout_type", mode="before")
    @classmethod
    def normalize_workout_type(cls, value):
        return _lower(value)

    @field_validator("focus_areas")
    @classmethod
    def dedupe_focus_areas(cls, value):
        return _unique(value)


class WorkoutLogResponse(BaseModel):
    id: int
    user_id: int
    workout_date: date
    duration_minutes: int
    workout_type: WorkoutType
    rpe: int
    focus_areas: List[str] = []
    calorie_estimate: Optional[float] = None
    notes: Optional[str] = None
    studio_id: Optional[str] = None
    custom_studio_name: Optional[str] = None
    session_id: Optional[str] = None
    image_url: Optional[str] = None
    is_shared: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class WorkoutLogListResponse(BaseModel):
    logs: List[WorkoutLogResponse]
    next_cursor: Optional[int] = None
    has_more: bool


class ShareRequest(BaseModel):
    caption: Optional[str] = Field(default=None, max_length=2200)


class RecapResponse(BaseModel):
    log_id: int
    date_label: str
    workout_type: str
    type_label: str
    duration_minutes: int
    rpe: int
    rpe_label: str
    calorie_estimate: Optional[float] = None
    studio_name: Optional[str] = None
    focus_areas: List[str] = []
    image_url: Optional[str] = None
    current_streak: int = 0


class ShareResponse(BaseModel):
    log: WorkoutLogResponse
    recap: RecapResponse
    caption: str
    message: str
