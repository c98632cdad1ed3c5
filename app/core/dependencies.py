from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.models.user import User
from app.repositories.exercise_library_repository import ExerciseLibraryRepository
from app.repositories.goals_repository import GoalsRepository
from app.repositories.insight_repository import InsightRepository
from app.repositories.meal_repository import MealRepository
from app.repositories.user_repository import UserRepository
from app.repositories.workout_plan_repository import WorkoutPlanRepository
from app.repositories.workout_repository import WorkoutRepository
from app.services.auth_service import auth_service


security = HTTPBearer()


# Фабрики репозиториев, инжектируются в эндпоинты через Depends
def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_workout_repository(db: AsyncSession = Depends(get_db)) -> WorkoutRepository:
    return WorkoutRepository(db)


def get_meal_repository(db: AsyncSession = Depends(get_db)) -> MealRepository:
    return MealRepository(db)


def get_insight_repository(db: AsyncSession = Depends(get_db)) -> InsightRepository:
    return InsightRepository(db)


def get_plan_repository(db: AsyncSession = Depends(get_db)) -> WorkoutPlanRepository:
    return WorkoutPlanRepository(db)


def get_goals_repository(db: AsyncSession = Depends(get_db)) -> GoalsRepository:
    return GoalsRepository(db)


def get_exercise_library_repository(db: AsyncSession = Depends(get_db)) -> ExerciseLibraryRepository:
    return ExerciseLibraryRepository(db)


async def get_current_user(
        credentials: HTTPAuthorizationCredentials = Depends(security),
        repo: UserRepository = Depends(get_user_repository),
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Невалидный токен доступа",
        headers={"WWW-Authenticate": "Bearer"},
    )

    user_id = auth_service.decode_access_token(credentials.credentials)
    if user_id is None:
        raise credentials_exception

    user = await repo.get_by_id(user_id)
    if user is None:
        raise credentials_exception

    return user
