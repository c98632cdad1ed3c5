from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.core.dependencies import get_current_user, get_exercise_library_repository
from app.models.user import User
from app.repositories.exercise_library_repository import ExerciseLibraryRepository
from app.schemas.exercise_library import ExerciseLibraryRead

router = APIRouter(tags=["exercises"])


@router.get("", response_model=List[ExerciseLibraryRead])
async def search_exercises(
    search: Optional[str] = None,
    primary_muscle: Optional[str] = None,
    equipment: Optional[str] = None,
    level: Optional[str] = None,
    limit: int = Query(100, ge=1, le=1000),
    current_user: User = Depends(get_current_user),
    repo: ExerciseLibraryRepository = Depends(get_exercise_library_repository)
):
    return await repo.search(
        search=search,
        primary_muscle=primary_muscle,
        equipment=equipment,
        level=level,
        limit=limit,
    )


@router.get("/{exercise_id}", response_model=ExerciseLibraryRead)
async def get_exercise(
    exercise_id: str,
    current_user: User = Depends(get_current_user),
    repo: ExerciseLibraryRepository = Depends(get_exercise_library_repository)
):
    exercise = await repo.get_by_id(exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail="Упражнение не найдено в справочнике")
    return exercise
