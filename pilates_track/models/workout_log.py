import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Boolean, Float, Enum, JSON, Text
from sqlalchemy.orm import relationship

from pilates_track.core.base import Base


class WorkoutTypeEnum(str, enum.Enum):
    reformer = "reformer"
    mat = "mat"
    tower = "tower"
    other = "other"


class FocusAreaEnum(str, enum.Enum):
    core = "core"
    glutes = "glutes"
    legs = "legs"
    arms = "arms"
    back = "back"
    mobility = "mobility"


class WorkoutLog(Base):
    __tablename__ = "workout_logs"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    # Календарная дата без времени: стрики и недели считаются по датам
    workout_date = Column(Date, nullable=False, index=True)
    duration_minutes = Column(Integer, nullable=False)
    workout_type = Column(Enum(WorkoutTypeEnum), nullable=False)
    rpe = Column(Integer, nullable=False)
    focus_areas = Column(JSON, default=list, nullable=False)
    calorie_estimate = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)

    studio_id = Column(String, nullable=True)
    custom_studio_name = Column(String, nullable=True)
    session_id = Column(String, nullable=True)
    image_url = Column(String, nullable=True)
    is_shared = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="workout_logs")
