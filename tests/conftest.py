"""
Общие фикстуры для всех тестов FitTrack backend.

Стратегия:
- Тестовое FastAPI-приложение создаётся без startup-событий (нет подключения к БД).
- Для эндпоинтов все фабрики репозиториев заменяются на AsyncMock(spec=...),
  а get_current_user на лямбду с нужным пользователем.
- Тесты репозиториев работают с настоящим SQLAlchemy поверх in-memory SQLite
  (aiosqlite), с включёнными внешними ключами.
- JWT-токены создаются через auth_service.create_access_token() для проверки middleware.
"""

import pytest
from unittest.mock import AsyncMock
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI
from datetime import datetime
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.api.router import api_router
from app.core.base import Base
from app.models.user import User
from app.services.auth_service import auth_service
from app.repositories.user_repository import UserRepository
from app.repositories.workout_repository import WorkoutRepository
from app.repositories.meal_repository import MealRepository
from app.repositories.insight_repository import InsightRepository
from app.repositories.workout_plan_repository import WorkoutPlanRepository
from app.repositories.goals_repository import GoalsRepository
from app.repositories.exercise_library_repository import ExerciseLibraryRepository
from app.core.dependencies import (
    get_current_user,
    get_user_repository,
    get_workout_repository,
    get_meal_repository,
    get_insight_repository,
    get_plan_repository,
    get_goals_repository,
    get_exercise_library_repository,
)


# ---------------------------------------------------------------------------
# Вспомогательные функции
# ---------------------------------------------------------------------------

def create_test_app() -> FastAPI:
    """Тестовое FastAPI-приложение без startup-событий."""
    test_app = FastAPI(title="FitTrack Test App")
    test_app.include_router(api_router, prefix="/api")
    return test_app


def make_auth_headers(user: User) -> dict:
    """Создать заголовки авторизации с валидным JWT для указанного пользователя."""
    access_token = auth_service.create_access_token(data={"sub": str(user.id)})
    return {"Authorization": f"Bearer {access_token}"}


async def create_db_user(session: AsyncSession, username: str = "tester") -> User:
    """Сохранить пользователя в тестовую БД (нужен для внешних ключей)."""
    user = User(
        username=username,
        email=f"{username}@example.com",
        password="hashed",
        name=username.title(),
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


# ---------------------------------------------------------------------------
# Фикстуры пользователей
# ---------------------------------------------------------------------------

@pytest.fixture
def user_fixture() -> User:
    """Обычный пользователь."""
    return User(
        id=1,
        username="tester",
        email="test@example.com",
        password=auth_service.hash_password("password123"),
        name="Tester",
        created_at=datetime.utcnow(),
    )


# ---------------------------------------------------------------------------
# Мокированные репозитории
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_repo() -> AsyncMock:
    """Мокированный UserRepository для auth-эндпоинтов."""
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def mock_workout_repo() -> AsyncMock:
    return AsyncMock(spec=WorkoutRepository)


@pytest.fixture
def mock_meal_repo() -> AsyncMock:
    return AsyncMock(spec=MealRepository)


@pytest.fixture
def mock_insight_repo() -> AsyncMock:
    return AsyncMock(spec=InsightRepository)


@pytest.fixture
def mock_plan_repo() -> AsyncMock:
    return AsyncMock(spec=WorkoutPlanRepository)


@pytest.fixture
def mock_goals_repo() -> AsyncMock:
    return AsyncMock(spec=GoalsRepository)


@pytest.fixture
def mock_exercise_repo() -> AsyncMock:
    return AsyncMock(spec=ExerciseLibraryRepository)


@pytest.fixture
def repo_overrides(
        mock_repo,
        mock_workout_repo,
        mock_meal_repo,
        mock_insight_repo,
        mock_plan_repo,
        mock_goals_repo,
        mock_exercise_repo,
) -> dict:
    """Подмена всех фабрик репозиториев: к БД никто не обращается."""
    return {
        get_user_repository: lambda: mock_repo,
        get_workout_repository: lambda: mock_workout_repo,
        get_meal_repository: lambda: mock_meal_repo,
        get_insight_repository: lambda: mock_insight_repo,
        get_plan_repository: lambda: mock_plan_repo,
        get_goals_repository: lambda: mock_goals_repo,
        get_exercise_library_repository: lambda: mock_exercise_repo,
    }


# ---------------------------------------------------------------------------
# HTTP-клиенты
# ---------------------------------------------------------------------------

@pytest.fixture
async def client(repo_overrides) -> AsyncGenerator[AsyncClient, None]:
    """
    Базовый клиент без подмены пользователя.
    Используется для auth-эндпоинтов и проверок отказа без токена.
    """
    app = create_test_app()
    app.dependency_overrides.update(repo_overrides)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def user_client(user_fixture, repo_overrides) -> AsyncGenerator[AsyncClient, None]:
    """
    Клиент, аутентифицированный как обычный пользователь.
    get_current_user → user_fixture.
    """
    app = create_test_app()
    app.dependency_overrides.update(repo_overrides)
    app.dependency_overrides[get_current_user] = lambda: user_fixture
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ---------------------------------------------------------------------------
# Тестовая БД (SQLite в памяти)
# ---------------------------------------------------------------------------

@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Сессия с теми же настройками, что и AsyncSessionLocal приложения."""
    session_factory = async_sessionmaker(db_engine, expire_on_commit=False, autoflush=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
async def db_user(db_session) -> User:
    return await create_db_user(db_session, "tester")


@pytest.fixture
async def other_db_user(db_session) -> User:
    return await create_db_user(db_session, "stranger")
