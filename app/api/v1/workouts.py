from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.dependencies import get_current_user, get_workout_repository
from app.models.user import User
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.workout import (
    WorkoutCreateRequest,
    WorkoutUpdateRequest,
    WorkoutStats,
    SetCreate,
    SetRead,
    serialize_workout,
)

router = APIRouter(tags=["workouts"])


def _dump_exercises(exercises):
    if exercises is None:
        return None
    return [exercise.model_dump() for exercise in exercises]


@router.get("")
async def get_workouts(
    limit: int = Query(50, ge=1, le=200),
    current_user: User = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository)
):
    """Последние тренировки пользователя, новые первыми"""
    workouts = await repo.get_workouts(current_user.id, limit=limit)
    return [serialize_workout(workout) for workout in workouts]


@router.get("/stats", response_model=WorkoutStats)
async def get_workout_stats(
    days: int = Query(7, ge=1, le=365),
    current_user: User = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository)
):
    stats = await repo.get_workout_stats(current_user.id, days=days)
    return WorkoutStats(**stats)


@router.get("/{workout_id}")
async def get_workout(
    workout_id: int,
    current_user: User = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository)
):
    workout = await repo.get_workout(workout_id, current_user.id)
    if workout is None:
        raise HTTPException(status_code=404, detail="Тренировка не найдена")
    return serialize_workout(workout)


@router.post("")
async def create_workout(
    payload: WorkoutCreateRequest,
    current_user: User = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository)
):
    """Создать тренировку; для силовой - вместе с упражнениями и подходами"""
    workout = await repo.create_workout(
        current_user.id,
        payload.workout.model_dump(),
        _dump_exercises(payload.exercises),
    )
    return serialize_workout(workout)


@router.put("/{workout_id}")
async def update_workout(
    workout_id: int,
    payload: WorkoutUpdateRequest,
    current_user: User = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository)
):
    """Обновить тренировку. Список упражнений силовой тренировки заменяется целиком"""
    workout = await repo.update_workout(
        workout_id,
        current_user.id,
        payload.workout.model_dump(exclude_unset=True),
        _dump_exercises(payload.exercises),
    )
    if workout is None:
        raise HTTPException(status_code=404, detail="Тренировка не найдена")
    return serialize_workout(workout)


@router.delete("/{workout_id}")
async def delete_workout(
    workout_id: int,
    current_user: User = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository)
):
    deleted = await repo.delete_workout(workout_id, current_user.id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Тренировка не найдена")
    return {"message": "Тренировка удалена"}


@router.post("/exercises/{exercise_id}/sets", response_model=SetRead, status_code=status.HTTP_201_CREATED)
async def add_set(
    exercise_id: int,
    payload: SetCreate,
    current_user: User = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository)
):
    workout_set = await repo.add_set(exercise_id, current_user.id, payload.model_dump())
    if workout_set is None:
        raise HTTPException(status_code=404, detail="Упражнение не найдено")
    return workout_set


@router.delete("/sets/{set_id}")
async def delete_set(
    set_id: int,
    current_user: User = Depends(get_current_user),
    repo: WorkoutRepository = Depends(get_workout_repository)
):
    """Удалить подход; оставшиеся подходы перенумеровываются 1..N"""
    deleted = await repo.delete_set(set_id, current_user.id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Подход не найден")
    return {"message": "Подход удален"}
