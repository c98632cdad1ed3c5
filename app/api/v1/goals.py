from fastapi import APIRouter, Depends

from app.core.dependencies import get_current_user, get_goals_repository
from app.models.user import User
from app.repositories.goals_repository import GoalsRepository
from app.schemas.user_goals import UserGoalsUpdate, UserGoalsRead

router = APIRouter(tags=["user-goals"])


@router.get("", response_model=UserGoalsRead)
async def get_user_goals(
    current_user: User = Depends(get_current_user),
    repo: GoalsRepository = Depends(get_goals_repository)
):
    """Цели пользователя; если они еще не заданы - значения по умолчанию"""
    goals = await repo.get_goals(current_user.id)
    if goals is None:
        return UserGoalsRead(user_id=current_user.id)
    return goals


@router.put("", response_model=UserGoalsRead)
async def update_user_goals(
    payload: UserGoalsUpdate,
    current_user: User = Depends(get_current_user),
    repo: GoalsRepository = Depends(get_goals_repository)
):
    return await repo.upsert_goals(current_user.id, payload.model_dump())
