"""Хранилище тренировок.

Силовая тренировка сохраняется вместе с упражнениями и подходами как единое
целое: создание и замена детей выполняются в одной транзакции сессии.
"""

import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional, List, Dict, Any, Sequence

from sqlalchemy import select, delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.workout import Workout, Exercise, WorkoutSet, WorkoutTypeEnum
from app.services.nutrition_calculator import NutritionCalculator

logger = logging.getLogger(__name__)

WORKOUT_FIELDS = (
    "type", "workout_type", "duration", "distance", "calories_burned",
    "notes", "tags", "date", "plan_id", "plan_day_id",
)


def to_decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(str(value))


def renumber_sets(sets: Sequence[WorkoutSet]) -> None:
    """Перенумеровать подходы 1..N, сохраняя их относительный порядок"""
    for number, workout_set in enumerate(sorted(sets, key=lambda s: s.set_number), start=1):
        workout_set.set_number = number


def build_set(set_number: int, set_data: Dict[str, Any]) -> WorkoutSet:
    return WorkoutSet(
        set_number=set_number,
        reps=set_data["reps"],
        weight=to_decimal(set_data.get("weight")),
        is_warmup=bool(set_data.get("is_warmup") or False),
        rest_time=set_data.get("rest_time"),
        rpe=set_data.get("rpe"),
    )


def build_exercises(workout_id: int, exercises_data: List[Dict[str, Any]]) -> List[Exercise]:
    """Упражнения с подходами в порядке, в котором их прислал клиент"""
    exercises = []
    for exercise_data in exercises_data:
        exercise = Exercise(
            workout_id=workout_id,
            name=exercise_data["name"],
            category=exercise_data.get("category"),
            notes=exercise_data.get("notes"),
        )
        exercise.sets = [
            build_set(number, set_data)
            for number, set_data in enumerate(exercise_data.get("sets") or [], start=1)
        ]
        exercises.append(exercise)
    return exercises


class WorkoutRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _workout_query():
        return (
            select(Workout)
            .options(selectinload(Workout.exercises).selectinload(Exercise.sets))
            .execution_options(populate_existing=True)
        )

    @staticmethod
    def _workout_values(data: Dict[str, Any]) -> Dict[str, Any]:
        values = {key: value for key, value in data.items() if key in WORKOUT_FIELDS}
        if "distance" in values:
            values["distance"] = to_decimal(values["distance"])
        if values.get("workout_type") is not None:
            values["workout_type"] = WorkoutTypeEnum(values["workout_type"]).value
        return values

    async def get_workouts(self, user_id: int, limit: int = 50) -> List[Workout]:
        result = await self.db.execute(
            self._workout_query()
            .where(Workout.user_id == user_id)
            .order_by(Workout.date.desc(), Workout.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_workout(self, workout_id: int, user_id: int) -> Optional[Workout]:
        result = await self.db.execute(
            self._workout_query().where(Workout.id == workout_id, Workout.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def create_workout(
            self,
            user_id: int,
            data: Dict[str, Any],
            exercises: Optional[List[Dict[str, Any]]] = None,
    ) -> Workout:
        try:
            workout = Workout(user_id=user_id, **self._workout_values(data))
            self.db.add(workout)
            await self.db.flush()

            if workout.is_strength and exercises:
                self.db.add_all(build_exercises(workout.id, exercises))
                await self.db.flush()

            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("Failed to create workout for user %s", user_id)
            raise

        return await self.get_workout(workout.id, user_id)

    async def _replace_exercises(self, workout_id: int, exercises: List[Dict[str, Any]]) -> None:
        exercise_ids = select(Exercise.id).where(Exercise.workout_id == workout_id)
        await self.db.execute(delete(WorkoutSet).where(WorkoutSet.exercise_id.in_(exercise_ids)))
        await self.db.execute(delete(Exercise).where(Exercise.workout_id == workout_id))

        self.db.add_all(build_exercises(workout_id, exercises))
        await self.db.flush()

    async def update_workout(
            self,
            workout_id: int,
            user_id: int,
            data: Dict[str, Any],
            exercises: Optional[List[Dict[str, Any]]] = None,
    ) -> Optional[Workout]:
        """Частичное обновление тренировки.

        Если пришел ``workout_type == "strength"`` и список упражнений, старые
        подходы и упражнения удаляются целиком и создаются заново из списка.
        Это полная замена, а не слияние. Без ``workout_type`` в запросе список
        упражнений игнорируется.
        """
        try:
            result = await self.db.execute(
                select(Workout)
                .where(Workout.id == workout_id, Workout.user_id == user_id)
                .with_for_update()
            )
            workout = result.scalar_one_or_none()
            if workout is None:
                return None

            for field, value in self._workout_values(data).items():
                setattr(workout, field, value)
            await self.db.flush()

            incoming_type = data.get("workout_type")
            if incoming_type is not None and WorkoutTypeEnum(incoming_type) == WorkoutTypeEnum.strength \
                    and exercises is not None:
                await self._replace_exercises(workout.id, exercises)
                logger.info("Replaced exercises of workout %s with %d new ones", workout.id, len(exercises))
            elif exercises is not None:
                logger.debug(
                    "Exercises for workout %s ignored: workout_type=strength was not sent", workout.id
                )

            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("Failed to update workout %s", workout_id)
            raise

        return await self.get_workout(workout_id, user_id)

    async def delete_workout(self, workout_id: int, user_id: int) -> bool:
        result = await self.db.execute(
            select(Workout).where(Workout.id == workout_id, Workout.user_id == user_id)
        )
        workout = result.scalar_one_or_none()
        if workout is None:
            return False

        await self.db.delete(workout)
        await self.db.commit()
        return True

    async def _get_owned_exercise(self, exercise_id: int, user_id: int) -> Optional[Exercise]:
        result = await self.db.execute(
            select(Exercise)
            .join(Exercise.workout)
            .where(Exercise.id == exercise_id, Workout.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def add_set(self, exercise_id: int, user_id: int, data: Dict[str, Any]) -> Optional[WorkoutSet]:
        """Добавить подход в конец упражнения (номер = последний + 1)"""
        exercise = await self._get_owned_exercise(exercise_id, user_id)
        if exercise is None:
            return None

        last_number = await self.db.execute(
            select(func.coalesce(func.max(WorkoutSet.set_number), 0))
            .where(WorkoutSet.exercise_id == exercise_id)
        )
        workout_set = build_set(last_number.scalar_one() + 1, data)
        workout_set.exercise_id = exercise_id

        self.db.add(workout_set)
        await self.db.commit()
        await self.db.refresh(workout_set)
        return workout_set

    async def delete_set(self, set_id: int, user_id: int) -> bool:
        """Удалить подход и перенумеровать оставшиеся подходы упражнения"""
        try:
            result = await self.db.execute(
                select(WorkoutSet)
                .join(WorkoutSet.exercise)
                .join(Exercise.workout)
                .where(WorkoutSet.id == set_id, Workout.user_id == user_id)
            )
            workout_set = result.scalar_one_or_none()
            if workout_set is None:
                return False

            exercise_id = workout_set.exercise_id
            await self.db.delete(workout_set)
            await self.db.flush()

            remaining = await self.db.execute(
                select(WorkoutSet)
                .where(WorkoutSet.exercise_id == exercise_id)
                .order_by(WorkoutSet.set_number)
            )
            renumber_sets(remaining.scalars().all())
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("Failed to delete set %s", set_id)
            raise

        return True

    async def get_workout_stats(self, user_id: int, days: int = 7) -> Dict[str, int]:
        """Агрегаты по тренировкам за последние ``days`` дней"""
        since = datetime.utcnow() - timedelta(days=days)

        result = await self.db.execute(
            select(
                func.count(Workout.id),
                func.coalesce(func.sum(Workout.duration), 0),
                func.coalesce(func.sum(Workout.calories_burned), 0),
                func.coalesce(func.avg(Workout.duration), 0),
            ).where(Workout.user_id == user_id, Workout.date >= since)
        )
        total_workouts, total_minutes, total_calories, avg_duration = result.one()

        return {
            "total_workouts": int(total_workouts or 0),
            "total_minutes": int(total_minutes or 0),
            "total_calories": int(total_calories or 0),
            "avg_duration": NutritionCalculator.round_half_up(avg_duration),
        }
