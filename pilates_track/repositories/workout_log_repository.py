from datetime import date
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from pilates_track.models.workout_log import WorkoutLog


class WorkoutLogRepository:
    """Хранилище логов тренировок. Бизнес-валидация — на уровне эндпоинтов."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, log_id: int) -> Optional[WorkoutLog]:
        result = await self.db.execute(select(WorkoutLog).where(WorkoutLog.id == log_id))
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[WorkoutLog]:
        """Все логи пользователя (опционально в диапазоне дат) — вход для агрегатора статистики."""
        query = select(WorkoutLog).where(WorkoutLog.user_id == user_id)
        if start_date is not None:
            query = query.where(WorkoutLog.workout_date >= start_date)
        if end_date is not None:
            query = query.where(WorkoutLog.workout_date <= end_date)
        result = await self.db.execute(query.order_by(WorkoutLog.workout_date.asc()))
        return list(result.scalars().all())

    async def list_page(
        self,
        user_id: int,
        limit: int,
        cursor: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[WorkoutLog]:
        """
        Страница логов, новые сверху.

        Возвращает до limit + 1 записей, чтобы вызывающий код понял, есть ли ещё.
        cursor — id последнего элемента предыдущей страницы. Если такого лога
        у пользователя нет (удалён или чужой), страница пустая.
        """
        query = select(WorkoutLog).where(WorkoutLog.user_id == user_id)
        if start_date is not None:
            query = query.where(WorkoutLog.workout_date >= start_date)
        if end_date is not None:
            query = query.where(WorkoutLog.workout_date <= end_date)

        if cursor is not None:
            anchor = await self.get_by_id(cursor)
            if anchor is None or anchor.user_id != user_id:
                return []
            query = query.where(
                (WorkoutLog.workout_date < anchor.workout_date)
                | ((WorkoutLog.workout_date == anchor.workout_date) & (WorkoutLog.id < anchor.id))
            )

        query = query.order_by(WorkoutLog.workout_date.desc(), WorkoutLog.id.desc()).limit(limit + 1)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def create(self, log: WorkoutLog) -> WorkoutLog:
        self.db.add(log)
        await self.db.commit()
        await self.db.refresh(log)
        return log

    async def save(self, log: WorkoutLog) -> WorkoutLog:
        await self.db.commit()
        await self.db.refresh(log)
        return log

    async def delete(self, log: WorkoutLog) -> None:
        await self.db.delete(log)
        await self.db.commit()
