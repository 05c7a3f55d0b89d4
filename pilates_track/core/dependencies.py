from datetime import date

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from pilates_track.core.db import get_db
from pilates_track.core.config import settings
from pilates_track.models.user import User
from pilates_track.repositories.user_repository import UserRepository
from pilates_track.repositories.workout_log_repository import WorkoutLogRepository
from pilates_track.services.date_utils import today_in


security = HTTPBearer()


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    """Фабрика репозитория — инжектируется в эндпоинты через Depends."""
    return UserRepository(db)


def get_workout_log_repository(db: AsyncSession = Depends(get_db)) -> WorkoutLogRepository:
    return WorkoutLogRepository(db)


def get_today() -> date:
    """
    "Сегодня" для текущего запроса.

    Определяется один раз в часовом поясе settings.TIMEZONE и дальше передаётся
    явно — стрик, неделя и месяц считаются относительно одного и того же дня.
    """
    return today_in(settings.TIMEZONE)


async def get_current_user(
        credentials: HTTPAuthorizationCredentials = Depends(security),
        repo: UserRepository = Depends(get_user_repository),
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Невалидный токен доступа",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
        user_id: str = payload.get("sub")
        if user_id is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    user = await repo.get_by_id(int(user_id))
    if user is None:
        raise credentials_exception

    return user
