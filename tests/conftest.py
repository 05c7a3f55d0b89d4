"""
Общие фикстуры для всех тестов Pilates Track backend.

Стратегия:
- Тестовое FastAPI-приложение создаётся без startup-событий (нет подключения к БД).
- UserRepository и WorkoutLogRepository заменяются на AsyncMock (mock_repo, mock_log_repo).
- get_current_user подменяется лямбдой с нужным пользователем,
  get_today — фиксированной датой, чтобы стрики и недели были детерминированными.
- JWT-токены создаются через auth_service.create_access_token() для проверки middleware.
"""

import pytest
from unittest.mock import AsyncMock
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI
from datetime import date, datetime
from types import SimpleNamespace
from typing import AsyncGenerator

from pilates_track.api.router import api_router
from pilates_track.models.user import User, RoleEnum
from pilates_track.models.workout_log import WorkoutLog, WorkoutTypeEnum
from pilates_track.services.auth_service import auth_service
from pilates_track.repositories.user_repository import UserRepository
from pilates_track.repositories.workout_log_repository import WorkoutLogRepository
from pilates_track.core.dependencies import (
    get_current_user,
    get_today,
    get_user_repository,
    get_workout_log_repository,
)

# Среда, 10 января 2024: неделя 08.01 (пн) — 14.01 (вс)
TODAY = date(2024, 1, 10)


# ---------------------------------------------------------------------------
# Вспомогательные функции
# ---------------------------------------------------------------------------

def create_test_app() -> FastAPI:
    """Тестовое FastAPI-приложение без startup-событий."""
    test_app = FastAPI(title="Pilates Track Test App")
    test_app.include_router(api_router, prefix="/api/v1")
    return test_app


def make_auth_headers(user: User) -> dict:
    """Создать заголовки авторизации с валидным JWT для указанного пользователя."""
    access_token = auth_service.create_access_token(
        data={"sub": str(user.id), "role": user.role.value}
    )
    return {"Authorization": f"Bearer {access_token}"}


def make_log(**overrides) -> SimpleNamespace:
    """Лёгкий лог тренировки для юнит-тестов агрегатора (без ORM)."""
    fields = dict(
        id=1,
        user_id=1,
        workout_date=TODAY,
        duration_minutes=45,
        workout_type="reformer",
        rpe=5,
        focus_areas=[],
        calorie_estimate=None,
        custom_studio_name=None,
        image_url=None,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def make_workout_log(user_id: int = 1, log_id: int = 1, **overrides) -> WorkoutLog:
    fields = dict(
        id=log_id,
        user_id=user_id,
        workout_date=TODAY,
        duration_minutes=50,
        workout_type=WorkoutTypeEnum.reformer,
        rpe=6,
        focus_areas=["core"],
        calorie_estimate=200.0,
        is_shared=False,
        created_at=datetime(2024, 1, 10, 9, 0),
    )
    fields.update(overrides)
    return WorkoutLog(**fields)


# ---------------------------------------------------------------------------
# Фикстуры пользователей
# ---------------------------------------------------------------------------

@pytest.fixture
def user_fixture() -> User:
    """Обычный пользователь с ролью 'user'."""
    return User(
        id=1,
        email="test@example.com",
        nickname="tester",
        password=auth_service.hash_password("password123"),
        role=RoleEnum.user,
        weight_kg=None,
        created_at=datetime.utcnow(),
    )


@pytest.fixture
def other_user_fixture() -> User:
    return User(
        id=2,
        email="other@example.com",
        nickname="other",
        password=auth_service.hash_password("other123"),
        role=RoleEnum.user,
        created_at=datetime.utcnow(),
    )


# ---------------------------------------------------------------------------
# Фикстуры для зависимостей
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_repo() -> AsyncMock:
    """Мокированный UserRepository для auth-эндпоинтов."""
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def mock_log_repo() -> AsyncMock:
    """
    Мокированный WorkoutLogRepository.
    create/save возвращают переданный лог, create проставляет id.
    """
    repo = AsyncMock(spec=WorkoutLogRepository)
    repo.list_for_user.return_value = []
    repo.list_page.return_value = []
    repo.get_by_id.return_value = None

    async def fake_create(log):
        log.id = log.id or 101
        return log

    async def fake_save(log):
        return log

    repo.create.side_effect = fake_create
    repo.save.side_effect = fake_save
    return repo


# ---------------------------------------------------------------------------
# HTTP-клиенты
# ---------------------------------------------------------------------------

@pytest.fixture
async def client(mock_repo, mock_log_repo) -> AsyncGenerator[AsyncClient, None]:
    """
    Базовый клиент без подменённого пользователя.
    Используется для auth-эндпоинтов (register, login, refresh, logout, me).
    """
    app = create_test_app()
    app.dependency_overrides[get_user_repository] = lambda: mock_repo
    app.dependency_overrides[get_workout_log_repository] = lambda: mock_log_repo
    app.dependency_overrides[get_today] = lambda: TODAY
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def user_client(user_fixture, mock_repo, mock_log_repo) -> AsyncGenerator[AsyncClient, None]:
    """
    Клиент, аутентифицированный как обычный пользователь.
    get_current_user → user_fixture, get_today → TODAY.
    """
    app = create_test_app()
    app.dependency_overrides[get_user_repository] = lambda: mock_repo
    app.dependency_overrides[get_workout_log_repository] = lambda: mock_log_repo
    app.dependency_overrides[get_current_user] = lambda: user_fixture
    app.dependency_overrides[get_today] = lambda: TODAY
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
