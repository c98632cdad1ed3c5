from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.dependencies import get_current_user, get_plan_repository
from app.models.user import User
from app.repositories.workout_plan_repository import WorkoutPlanRepository
from app.schemas.workout_plan import (
    WorkoutPlanCreateRequest,
    WorkoutPlanUpdate,
    WorkoutPlanRead,
    WorkoutPlanDayRead,
    AdvancePlanResponse,
)
from app.services.plan_progression import PlanHasNoDaysError

router = APIRouter(tags=["workout-plans"])


@router.get("", response_model=List[WorkoutPlanRead])
async def get_workout_plans(
    current_user: User = Depends(get_current_user),
    repo: WorkoutPlanRepository = Depends(get_plan_repository)
):
    return await repo.get_plans(current_user.id)


@router.get("/active", response_model=Optional[WorkoutPlanRead])
async def get_active_plan(
    current_user: User = Depends(get_current_user),
    repo: WorkoutPlanRepository = Depends(get_plan_repository)
):
    """Активный план или null, если плана нет"""
    return await repo.get_active_plan(current_user.id)


@router.get("/next-day", response_model=Optional[WorkoutPlanDayRead])
async def get_next_workout_day(
    current_user: User = Depends(get_current_user),
    repo: WorkoutPlanRepository = Depends(get_plan_repository)
):
    """Следующий день активного плана или null"""
    return await repo.get_next_workout_day(current_user.id)


@router.post("", response_model=WorkoutPlanRead)
async def create_workout_plan(
    payload: WorkoutPlanCreateRequest,
    current_user: User = Depends(get_current_user),
    repo: WorkoutPlanRepository = Depends(get_plan_repository)
):
    """Создать план; ранее активный план пользователя деактивируется"""
    return await repo.create_plan(
        current_user.id,
        payload.plan.model_dump(),
        [day.model_dump(exclude={"day_index"}) for day in payload.days],
    )


@router.put("/{plan_id}", response_model=WorkoutPlanRead)
async def update_workout_plan(
    plan_id: int,
    payload: WorkoutPlanUpdate,
    current_user: User = Depends(get_current_user),
    repo: WorkoutPlanRepository = Depends(get_plan_repository)
):
    plan = await repo.update_plan(plan_id, current_user.id, payload.model_dump(exclude_unset=True))
    if plan is None:
        raise HTTPException(status_code=404, detail="План тренировок не найден")
    return plan


@router.delete("/{plan_id}")
async def delete_workout_plan(
    plan_id: int,
    current_user: User = Depends(get_current_user),
    repo: WorkoutPlanRepository = Depends(get_plan_repository)
):
    deleted = await repo.delete_plan(plan_id, current_user.id)
    if not deleted:
        raise HTTPException(status_code=404, detail="План тренировок не найден")
    return {"message": "План тренировок удален"}


@router.post("/{plan_id}/advance", response_model=AdvancePlanResponse)
async def advance_workout_plan(
    plan_id: int,
    current_user: User = Depends(get_current_user),
    repo: WorkoutPlanRepository = Depends(get_plan_repository)
):
    """Перейти к следующему дню плана. Чужой план не меняется и не дает ошибки"""
    try:
        plan = await repo.advance_plan(current_user.id, plan_id)
    except PlanHasNoDaysError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    if plan is None:
        return AdvancePlanResponse(advanced=False, plan=None)
    return AdvancePlanResponse(advanced=True, plan=WorkoutPlanRead.model_validate(plan))
