"""
Интеграционные тесты WorkoutRepository на SQLite в памяти.

Покрываемые сценарии:
- create_workout: силовая тренировка сохраняется вместе с упражнениями и подходами
- update_workout: полная замена упражнений силовой тренировки
- get/update/delete чужой тренировки: None / False
- add_set / delete_set: номера подходов остаются плотными 1..N
- get_workout_stats: пустое окно и агрегаты
"""

import logging

import pytest
from datetime import datetime, timedelta
from decimal import Decimal

from sqlalchemy import select, func

from app.models.workout import Exercise, WorkoutSet
from app.repositories.workout_repository import WorkoutRepository
from app.schemas.workout import serialize_workout

pytestmark = pytest.mark.integration


STRENGTH_WORKOUT = {"type": "strength", "workout_type": "strength", "duration": 60, "calories_burned": 400}
CARDIO_WORKOUT = {"type": "running", "workout_type": "cardio", "duration": 30, "distance": 5.25}

BENCH = {
    "name": "Bench Press",
    "category": "chest",
    "sets": [{"reps": 10, "weight": 60}, {"reps": 8, "weight": 70}, {"reps": 6, "weight": 80}],
}
SQUAT = {"name": "Squat", "category": "legs", "sets": [{"reps": 5, "weight": 100, "is_warmup": True}]}


async def count_rows(session, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


# ---------------------------------------------------------------------------
# create_workout / get_workout
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_strength_workout_with_exercises_and_sets(db_session, db_user):
    repo = WorkoutRepository(db_session)

    workout = await repo.create_workout(db_user.id, STRENGTH_WORKOUT, [BENCH, SQUAT])

    assert workout.id is not None
    assert [e.name for e in workout.exercises] == ["Bench Press", "Squat"]
    bench_sets = workout.exercises[0].sets
    assert [s.set_number for s in bench_sets] == [1, 2, 3]
    assert bench_sets[1].weight == Decimal("70")
    assert bench_sets[0].is_warmup is False
    assert workout.exercises[1].sets[0].is_warmup is True


@pytest.mark.asyncio
async def test_create_cardio_workout_ignores_exercises(db_session, db_user):
    """Для кардио упражнения не сохраняются, а в ответе нет поля exercises."""
    repo = WorkoutRepository(db_session)

    workout = await repo.create_workout(db_user.id, CARDIO_WORKOUT, [BENCH])

    assert await count_rows(db_session, Exercise) == 0
    payload = serialize_workout(workout)
    assert "exercises" not in payload
    assert payload["distance"] == 5.25


@pytest.mark.asyncio
async def test_create_workout_defaults_to_cardio(db_session, db_user):
    repo = WorkoutRepository(db_session)

    workout = await repo.create_workout(db_user.id, {"type": "yoga", "duration": 45})

    assert workout.workout_type == "cardio"
    assert workout.is_strength is False


@pytest.mark.asyncio
async def test_strength_workout_without_exercises_renders_empty_list(db_session, db_user):
    repo = WorkoutRepository(db_session)

    workout = await repo.create_workout(db_user.id, STRENGTH_WORKOUT)

    assert serialize_workout(workout)["exercises"] == []


@pytest.mark.asyncio
async def test_get_workouts_newest_first(db_session, db_user):
    repo = WorkoutRepository(db_session)
    now = datetime.utcnow()
    await repo.create_workout(db_user.id, {**CARDIO_WORKOUT, "date": now - timedelta(days=2)})
    await repo.create_workout(db_user.id, {**CARDIO_WORKOUT, "type": "cycling", "date": now})

    workouts = await repo.get_workouts(db_user.id)

    assert [w.type for w in workouts] == ["cycling", "running"]


# ---------------------------------------------------------------------------
# update_workout
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_strength_workout_replaces_all_exercises(db_session, db_user):
    """Старые упражнения и подходы удаляются полностью, а не сливаются с новыми."""
    repo = WorkoutRepository(db_session)
    workout = await repo.create_workout(db_user.id, STRENGTH_WORKOUT, [BENCH, SQUAT])

    deadlift = {"name": "Deadlift", "sets": [{"reps": 5, "weight": 140}, {"reps": 3, "weight": 150}]}
    updated = await repo.update_workout(
        workout.id, db_user.id, {"workout_type": "strength", "duration": 75}, [deadlift]
    )

    assert updated.duration == 75
    assert [e.name for e in updated.exercises] == ["Deadlift"]
    assert [s.set_number for s in updated.exercises[0].sets] == [1, 2]
    assert await count_rows(db_session, Exercise) == 1
    assert await count_rows(db_session, WorkoutSet) == 2


@pytest.mark.asyncio
async def test_update_without_exercises_keeps_children(db_session, db_user):
    repo = WorkoutRepository(db_session)
    workout = await repo.create_workout(db_user.id, STRENGTH_WORKOUT, [BENCH])

    updated = await repo.update_workout(workout.id, db_user.id, {"notes": "felt strong"})

    assert updated.notes == "felt strong"
    assert [e.name for e in updated.exercises] == ["Bench Press"]
    assert await count_rows(db_session, WorkoutSet) == 3


@pytest.mark.asyncio
async def test_update_exercises_without_workout_type_are_ignored(db_session, db_user, caplog):
    """Список упражнений без workout_type не трогает сохраненные упражнения, это видно в логе."""
    repo = WorkoutRepository(db_session)
    workout = await repo.create_workout(db_user.id, STRENGTH_WORKOUT, [BENCH])
    caplog.set_level(logging.DEBUG, logger="app.repositories.workout_repository")

    updated = await repo.update_workout(workout.id, db_user.id, {"notes": "x"}, [SQUAT])

    assert updated.notes == "x"
    assert [e.name for e in updated.exercises] == ["Bench Press"]
    assert await count_rows(db_session, WorkoutSet) == 3
    assert any("ignored" in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_update_with_empty_exercise_list_clears_children(db_session, db_user):
    repo = WorkoutRepository(db_session)
    workout = await repo.create_workout(db_user.id, STRENGTH_WORKOUT, [BENCH])

    updated = await repo.update_workout(workout.id, db_user.id, {"workout_type": "strength"}, [])

    assert updated.exercises == []
    assert await count_rows(db_session, WorkoutSet) == 0


# ---------------------------------------------------------------------------
# Владение тренировкой
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_foreign_workout_is_invisible(db_session, db_user, other_db_user):
    repo = WorkoutRepository(db_session)
    workout = await repo.create_workout(db_user.id, STRENGTH_WORKOUT, [BENCH])

    assert await repo.get_workout(workout.id, other_db_user.id) is None
    assert await repo.update_workout(workout.id, other_db_user.id, {"duration": 5}) is None
    assert await repo.delete_workout(workout.id, other_db_user.id) is False
    assert await repo.add_set(workout.exercises[0].id, other_db_user.id, {"reps": 1}) is None
    assert await repo.delete_set(workout.exercises[0].sets[0].id, other_db_user.id) is False

    unchanged = await repo.get_workout(workout.id, db_user.id)
    assert unchanged.duration == 60
    assert len(unchanged.exercises[0].sets) == 3


@pytest.mark.asyncio
async def test_delete_workout_cascades_to_exercises_and_sets(db_session, db_user):
    repo = WorkoutRepository(db_session)
    workout = await repo.create_workout(db_user.id, STRENGTH_WORKOUT, [BENCH, SQUAT])

    assert await repo.delete_workout(workout.id, db_user.id) is True

    assert await repo.get_workout(workout.id, db_user.id) is None
    assert await count_rows(db_session, Exercise) == 0
    assert await count_rows(db_session, WorkoutSet) == 0


# ---------------------------------------------------------------------------
# add_set / delete_set
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_add_set_appends_with_next_number(db_session, db_user):
    repo = WorkoutRepository(db_session)
    workout = await repo.create_workout(db_user.id, STRENGTH_WORKOUT, [BENCH])

    new_set = await repo.add_set(workout.exercises[0].id, db_user.id, {"reps": 4, "weight": 85, "rpe": 9})

    assert new_set.set_number == 4
    assert new_set.rpe == 9


@pytest.mark.asyncio
async def test_delete_set_renumbers_remaining_sets(db_session, db_user):
    """После удаления второго подхода из трех номера снова 1, 2 в прежнем порядке."""
    repo = WorkoutRepository(db_session)
    workout = await repo.create_workout(db_user.id, STRENGTH_WORKOUT, [BENCH])
    first, second, third = workout.exercises[0].sets

    assert await repo.delete_set(second.id, db_user.id) is True

    refreshed = await repo.get_workout(workout.id, db_user.id)
    remaining = refreshed.exercises[0].sets
    assert [s.set_number for s in remaining] == [1, 2]
    assert [s.id for s in remaining] == [first.id, third.id]


@pytest.mark.asyncio
async def test_delete_missing_set_returns_false(db_session, db_user):
    repo = WorkoutRepository(db_session)
    assert await repo.delete_set(999, db_user.id) is False


# ---------------------------------------------------------------------------
# get_workout_stats
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_workout_stats_empty_window_is_all_zero(db_session, db_user):
    repo = WorkoutRepository(db_session)

    stats = await repo.get_workout_stats(db_user.id)

    assert stats == {"total_workouts": 0, "total_minutes": 0, "total_calories": 0, "avg_duration": 0}


@pytest.mark.asyncio
async def test_workout_stats_aggregates_window_only(db_session, db_user, other_db_user):
    """Старые и чужие тренировки не учитываются; среднее округляется вверх с .5."""
    repo = WorkoutRepository(db_session)
    now = datetime.utcnow()
    await repo.create_workout(db_user.id, {"type": "run", "duration": 30, "calories_burned": 300, "date": now})
    await repo.create_workout(db_user.id, {"type": "run", "duration": 45, "date": now - timedelta(days=1)})
    await repo.create_workout(db_user.id, {"type": "run", "duration": 90, "date": now - timedelta(days=20)})
    await repo.create_workout(other_db_user.id, {"type": "run", "duration": 10, "date": now})

    stats = await repo.get_workout_stats(db_user.id, days=7)

    assert stats == {"total_workouts": 2, "total_minutes": 75, "total_calories": 300, "avg_duration": 38}
