from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from pilates_track.models.user import User, RoleEnum


class UserRepository:
    """Пользователи трекера и их refresh-токены."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _first(self, *conditions) -> Optional[User]:
        result = await self.db.execute(select(User).where(*conditions))
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return await self._first(User.id == user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self._first(User.email == email)

    async def get_by_refresh_token(self, refresh_token: str) -> Optional[User]:
        return await self._first(User.refresh_token == refresh_token)

    async def create_user(
        self,
        email: str,
        nickname: str,
        password_hash: str,
        weight_kg: Optional[float] = None,
    ) -> User:
        """
        Создать обычного пользователя.

        weight_kg необязателен: без него калории считаются по весу по умолчанию.
        """
        user = User(
            email=email,
            nickname=nickname,
            password=password_hash,
            role=RoleEnum.user,
            weight_kg=weight_kg,
            created_at=datetime.utcnow(),
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def store_refresh_token(
        self,
        user: User,
        refresh_token: Optional[str],
        expires: Optional[datetime] = None,
    ) -> None:
        """Запомнить текущий refresh-токен; None аннулирует его (logout, повторное использование)."""
        user.refresh_token = refresh_token
        user.refresh_token_expires = expires if refresh_token else None
        await self.db.commit()
