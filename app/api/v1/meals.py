from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from app.core.dependencies import get_current_user, get_meal_repository
from app.models.user import User
from app.repositories.meal_repository import MealRepository
from app.schemas.meal import MealCreate, MealUpdate, MealRead, MealStats

router = APIRouter(tags=["meals"])


@router.get("", response_model=List[MealRead])
async def get_meals(
    limit: int = Query(50, ge=1, le=200),
    current_user: User = Depends(get_current_user),
    repo: MealRepository = Depends(get_meal_repository)
):
    return await repo.get_meals(current_user.id, limit=limit)


@router.get("/stats", response_model=MealStats)
async def get_meal_stats(
    days: int = Query(1, ge=1, le=365),
    current_user: User = Depends(get_current_user),
    repo: MealRepository = Depends(get_meal_repository)
):
    stats = await repo.get_meal_stats(current_user.id, days=days)
    return MealStats(**stats)


@router.get("/{meal_id}", response_model=MealRead)
async def get_meal(
    meal_id: int,
    current_user: User = Depends(get_current_user),
    repo: MealRepository = Depends(get_meal_repository)
):
    meal = await repo.get_meal(meal_id, current_user.id)
    if meal is None:
        raise HTTPException(status_code=404, detail="Прием пищи не найден")
    return meal


@router.post("", response_model=MealRead)
async def create_meal(
    payload: MealCreate,
    current_user: User = Depends(get_current_user),
    repo: MealRepository = Depends(get_meal_repository)
):
    return await repo.create_meal(current_user.id, payload.model_dump())


@router.put("/{meal_id}", response_model=MealRead)
async def update_meal(
    meal_id: int,
    payload: MealUpdate,
    current_user: User = Depends(get_current_user),
    repo: MealRepository = Depends(get_meal_repository)
):
    meal = await repo.update_meal(meal_id, current_user.id, payload.model_dump(exclude_unset=True))
    if meal is None:
        raise HTTPException(status_code=404, detail="Прием пищи не найден")
    return meal


@router.delete("/{meal_id}")
async def delete_meal(
    meal_id: int,
    current_user: User = Depends(get_current_user),
    repo: MealRepository = Depends(get_meal_repository)
):
    deleted = await repo.delete_meal(meal_id, current_user.id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Прием пищи не найден")
    return {"message": "Прием пищи удален"}
