import logging

from pilates_track.core.config import settings
from pilates_track.core.base import Base
from pilates_track.core.db import engine

# Импортируем ВСЕ модели, чтобы они зарегистрировались в metadata
from pilates_track.models.user import User  # noqa: F401
from pilates_track.models.workout_log import WorkoutLog  # noqa: F401

logger = logging.getLogger(__name__)


async def init_database():
    """Инициализация базы данных"""
    async with engine.begin() as conn:
        # Удаляем все таблицы если RESET_DATABASE=true
        if settings.RESET_DATABASE:
            logger.warning("RESET_DATABASE=true - пересоздаем БД")
            await conn.run_sync(Base.metadata.drop_all)

        # Создаем все таблицы
        await conn.run_sync(Base.metadata.create_all)
        logger.info("Таблицы БД созданы/проверены")
