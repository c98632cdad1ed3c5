from datetime import datetime
from typing import Optional, Dict, Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user_goals import UserGoals
from app.repositories.workout_repository import to_decimal

GOAL_FIELDS = ("weekly_workout_goal", "daily_calorie_goal", "hydration_goal", "weight_goal", "target_body_fat")


class GoalsRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_goals(self, user_id: int) -> Optional[UserGoals]:
        result = await self.db.execute(select(UserGoals).where(UserGoals.user_id == user_id))
        return result.scalar_one_or_none()

    async def upsert_goals(self, user_id: int, data: Dict[str, Any]) -> UserGoals:
        """У пользователя ровно одна запись целей: создаем или обновляем ее"""
        values = {key: value for key, value in data.items() if key in GOAL_FIELDS}
        for field in ("weight_goal", "target_body_fat"):
            if field in values:
                values[field] = to_decimal(values[field])

        goals = await self.get_goals(user_id)
        if goals is None:
            goals = UserGoals(user_id=user_id, **values)
            self.db.add(goals)
        else:
            for field, value in values.items():
                setattr(goals, field, value)
            goals.updated_at = datetime.utcnow()

        await self.db.commit()
        await self.db.refresh(goals)
        return goals
