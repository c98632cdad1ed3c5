"""Хранилище планов тренировок и движок продвижения по дням плана.

У пользователя в любой момент не больше одного активного плана: создание
нового плана сначала деактивирует все текущие, и все это в одной транзакции.
"""

import logging
from datetime import datetime
from typing import Optional, List, Dict, Any

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.workout_plan import WorkoutPlan, WorkoutPlanDay
from app.services.plan_progression import PlanHasNoDaysError, next_day_index, resolve_current_day

logger = logging.getLogger(__name__)

PLAN_FIELDS = ("name", "description", "days_per_week", "current_day_index", "is_active")
DAY_FIELDS = ("name", "description", "muscle_groups", "exercises", "rest_day")


class WorkoutPlanRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _plan_query():
        return (
            select(WorkoutPlan)
            .options(selectinload(WorkoutPlan.days))
            .execution_options(populate_existing=True)
        )

    async def _deactivate_plans(self, user_id: int, keep_plan_id: Optional[int] = None) -> None:
        statement = (
            update(WorkoutPlan)
            .where(WorkoutPlan.user_id == user_id, WorkoutPlan.is_active.is_(True))
            .values(is_active=False)
        )
        if keep_plan_id is not None:
            statement = statement.where(WorkoutPlan.id != keep_plan_id)
        await self.db.execute(statement)

    async def get_plans(self, user_id: int) -> List[WorkoutPlan]:
        result = await self.db.execute(
            self._plan_query()
            .where(WorkoutPlan.user_id == user_id)
            .order_by(WorkoutPlan.created_at.desc(), WorkoutPlan.id.desc())
        )
        return list(result.scalars().all())

    async def get_plan(self, plan_id: int, user_id: int) -> Optional[WorkoutPlan]:
        result = await self.db.execute(
            self._plan_query().where(WorkoutPlan.id == plan_id, WorkoutPlan.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_active_plan(self, user_id: int) -> Optional[WorkoutPlan]:
        result = await self.db.execute(
            self._plan_query()
            .where(WorkoutPlan.user_id == user_id, WorkoutPlan.is_active.is_(True))
            .order_by(WorkoutPlan.created_at.desc(), WorkoutPlan.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def create_plan(
            self,
            user_id: int,
            data: Dict[str, Any],
            days: List[Dict[str, Any]],
    ) -> WorkoutPlan:
        """Создать план и его дни; предыдущий активный план деактивируется.

        ``day_index`` каждого дня равен его позиции в ``days``, индекс из
        входных данных игнорируется.
        """
        try:
            await self._deactivate_plans(user_id)

            plan = WorkoutPlan(
                user_id=user_id,
                name=data["name"],
                description=data.get("description"),
                days_per_week=data["days_per_week"],
                current_day_index=0,
                is_active=True,
            )
            plan.days = [
                WorkoutPlanDay(
                    day_index=index,
                    **{key: value for key, value in day.items() if key in DAY_FIELDS},
                )
                for index, day in enumerate(days)
            ]
            self.db.add(plan)
            await self.db.flush()
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("Failed to create workout plan for user %s", user_id)
            raise

        logger.info("User %s activated workout plan %s with %d days", user_id, plan.id, len(days))
        return await self.get_plan(plan.id, user_id)

    async def update_plan(self, plan_id: int, user_id: int, data: Dict[str, Any]) -> Optional[WorkoutPlan]:
        plan = await self.get_plan(plan_id, user_id)
        if plan is None:
            return None

        try:
            if data.get("is_active"):
                await self._deactivate_plans(user_id, keep_plan_id=plan_id)

            for field, value in data.items():
                if field in PLAN_FIELDS:
                    setattr(plan, field, value)
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("Failed to update workout plan %s", plan_id)
            raise

        return await self.get_plan(plan_id, user_id)

    async def delete_plan(self, plan_id: int, user_id: int) -> bool:
        result = await self.db.execute(
            select(WorkoutPlan).where(WorkoutPlan.id == plan_id, WorkoutPlan.user_id == user_id)
        )
        plan = result.scalar_one_or_none()
        if plan is None:
            return False

        await self.db.delete(plan)
        await self.db.commit()
        return True

    async def get_next_workout_day(self, user_id: int) -> Optional[WorkoutPlanDay]:
        plan = await self.get_active_plan(user_id)
        if plan is None:
            return None
        return resolve_current_day(plan.days, plan.current_day_index)

    async def advance_plan(self, user_id: int, plan_id: int) -> Optional[WorkoutPlan]:
        """Сдвинуть курсор плана на следующий день (по кругу).

        Чужой или несуществующий план - тихий no-op, возвращается None.
        План без дней - ``PlanHasNoDaysError``.
        """
        result = await self.db.execute(
            select(WorkoutPlan)
            .where(WorkoutPlan.id == plan_id, WorkoutPlan.user_id == user_id)
            .with_for_update()
        )
        plan = result.scalar_one_or_none()
        if plan is None:
            logger.info("Advance skipped: plan %s not found for user %s", plan_id, user_id)
            return None

        days_result = await self.db.execute(
            select(WorkoutPlanDay)
            .where(WorkoutPlanDay.plan_id == plan_id)
            .order_by(WorkoutPlanDay.day_index)
        )
        days = days_result.scalars().all()

        try:
            plan.current_day_index = next_day_index(plan.current_day_index, len(days), plan_id=plan_id)
            plan.last_workout_date = datetime.utcnow()
            await self.db.commit()
        except PlanHasNoDaysError:
            await self.db.rollback()
            logger.warning("Plan %s has no days, cursor left unchanged", plan_id)
            raise
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("Failed to advance workout plan %s", plan_id)
            raise

        logger.info("Plan %s advanced to day %s", plan_id, plan.current_day_index)
        return await self.get_plan(plan_id, user_id)
