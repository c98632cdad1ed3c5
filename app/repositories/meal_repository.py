import logging
from datetime import datetime, timedelta
from typing import Optional, List, Dict, Any

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.meal import Meal
from app.repositories.workout_repository import to_decimal
from app.services.nutrition_calculator import NutritionCalculator

logger = logging.getLogger(__name__)

MEAL_FIELDS = ("type", "food_items", "calories", "protein", "carbs", "fat", "notes", "date")
DECIMAL_FIELDS = ("protein", "carbs", "fat")


class MealRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _meal_values(data: Dict[str, Any]) -> Dict[str, Any]:
        values = {key: value for key, value in data.items() if key in MEAL_FIELDS}
        for field in DECIMAL_FIELDS:
            if field in values:
                values[field] = to_decimal(values[field])
        return values

    async def get_meals(self, user_id: int, limit: int = 50) -> List[Meal]:
        result = await self.db.execute(
            select(Meal)
            .where(Meal.user_id == user_id)
            .order_by(Meal.date.desc(), Meal.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_meal(self, meal_id: int, user_id: int) -> Optional[Meal]:
        result = await self.db.execute(
            select(Meal).where(Meal.id == meal_id, Meal.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def create_meal(self, user_id: int, data: Dict[str, Any]) -> Meal:
        meal = Meal(user_id=user_id, **self._meal_values(data))
        self.db.add(meal)
        await self.db.commit()
        await self.db.refresh(meal)
        return meal

    async def update_meal(self, meal_id: int, user_id: int, data: Dict[str, Any]) -> Optional[Meal]:
        meal = await self.get_meal(meal_id, user_id)
        if meal is None:
            return None

        for field, value in self._meal_values(data).items():
            setattr(meal, field, value)
        await self.db.commit()
        await self.db.refresh(meal)
        return meal

    async def delete_meal(self, meal_id: int, user_id: int) -> bool:
        meal = await self.get_meal(meal_id, user_id)
        if meal is None:
            return False

        await self.db.delete(meal)
        await self.db.commit()
        return True

    async def get_meal_stats(self, user_id: int, days: int = 1) -> Dict[str, Any]:
        """Калории и распределение БЖУ (в процентах) за последние ``days`` дней"""
        since = datetime.utcnow() - timedelta(days=days)

        result = await self.db.execute(
            select(
                func.count(Meal.id),
                func.coalesce(func.sum(Meal.calories), 0),
                func.coalesce(func.avg(Meal.calories), 0),
                func.coalesce(func.sum(Meal.protein), 0),
                func.coalesce(func.sum(Meal.carbs), 0),
                func.coalesce(func.sum(Meal.fat), 0),
            ).where(Meal.user_id == user_id, Meal.date >= since)
        )
        total_meals, total_calories, avg_calories, protein, carbs, fat = result.one()

        return {
            "total_meals": int(total_meals or 0),
            "total_calories": int(total_calories or 0),
            "avg_calories": NutritionCalculator.round_half_up(avg_calories),
            "nutrition_breakdown": NutritionCalculator.macro_breakdown(protein, carbs, fat),
        }
