import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.core.dependencies import (
    get_current_user,
    get_insight_repository,
    get_meal_repository,
    get_workout_repository,
)
from app.models.user import User
from app.repositories.insight_repository import InsightRepository
from app.repositories.meal_repository import MealRepository
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.insight import InsightRead
from app.schemas.meal import MealRead
from app.schemas.workout import serialize_workout
from app.services.ai_service import ai_service

router = APIRouter(tags=["insights"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[InsightRead])
async def get_insights(
    current_user: User = Depends(get_current_user),
    repo: InsightRepository = Depends(get_insight_repository)
):
    return await repo.get_insights(current_user.id)


@router.post("/generate", response_model=List[InsightRead])
async def generate_insights(
    current_user: User = Depends(get_current_user),
    repo: InsightRepository = Depends(get_insight_repository),
    workout_repo: WorkoutRepository = Depends(get_workout_repository),
    meal_repo: MealRepository = Depends(get_meal_repository)
):
    """Сгенерировать AI-инсайты по последним тренировкам и питанию и сохранить их"""
    workouts = await workout_repo.get_workouts(current_user.id, limit=30)
    meals = await meal_repo.get_meals(current_user.id, limit=30)
    workout_stats = await workout_repo.get_workout_stats(current_user.id, days=30)
    meal_stats = await meal_repo.get_meal_stats(current_user.id, days=7)

    items = await ai_service.generate_insights(
        workouts=[serialize_workout(workout) for workout in workouts],
        meals=[MealRead.model_validate(meal).model_dump(mode="json") for meal in meals],
        workout_stats=workout_stats,
        meal_stats=meal_stats,
    )
    logger.info("Generated %d insights for user %s", len(items), current_user.id)

    return await repo.create_insights(current_user.id, items)


@router.put("/{insight_id}/read")
async def mark_insight_as_read(
    insight_id: int,
    current_user: User = Depends(get_current_user),
    repo: InsightRepository = Depends(get_insight_repository)
):
    updated = await repo.mark_as_read(insight_id, current_user.id)
    if not updated:
        raise HTTPException(status_code=404, detail="Инсайт не найден")
    return {"message": "Инсайт отмечен как прочитанный"}
