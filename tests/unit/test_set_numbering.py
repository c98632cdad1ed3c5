"""
Модульные тесты сборки упражнений и нумерации подходов.

Функции не работают с БД: проверяются только ORM-объекты в памяти.
"""

import pytest
from decimal import Decimal

from app.models.workout import WorkoutSet
from app.repositories.workout_repository import build_exercises, build_set, renumber_sets, to_decimal

pytestmark = pytest.mark.unit


def test_build_exercises_numbers_sets_by_position():
    exercises = build_exercises(10, [
        {"name": "Bench Press", "sets": [{"reps": 10, "weight": 60}, {"reps": 8, "weight": 70}]},
        {"name": "Plank", "sets": [{"reps": 1}]},
    ])

    assert [e.name for e in exercises] == ["Bench Press", "Plank"]
    assert all(e.workout_id == 10 for e in exercises)
    assert [s.set_number for s in exercises[0].sets] == [1, 2]
    assert [s.set_number for s in exercises[1].sets] == [1]


def test_build_set_defaults_and_decimal_weight():
    workout_set = build_set(1, {"reps": 12, "weight": 22.5})

    assert workout_set.weight == Decimal("22.5")
    assert workout_set.is_warmup is False
    assert workout_set.rpe is None
    assert workout_set.rest_time is None


def test_build_set_without_weight_keeps_none():
    assert build_set(1, {"reps": 20}).weight is None


def test_build_exercises_without_sets():
    exercises = build_exercises(1, [{"name": "Stretching"}])
    assert exercises[0].sets == []


def test_renumber_sets_closes_gaps_preserving_order():
    sets = [
        WorkoutSet(set_number=5, reps=6),
        WorkoutSet(set_number=1, reps=10),
        WorkoutSet(set_number=3, reps=8),
    ]

    renumber_sets(sets)

    by_reps = {s.reps: s.set_number for s in sets}
    assert by_reps == {10: 1, 8: 2, 6: 3}


def test_to_decimal_uses_string_representation():
    """0.1 не должен превращаться в Decimal('0.1000000000000000055...')."""
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(None) is None
