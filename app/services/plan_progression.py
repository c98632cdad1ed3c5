"""Курсор дня в плане тренировок.

Дни плана образуют кольцо: индексы 0..N-1, после последнего дня снова идет
нулевой. Курсор ``current_day_index`` указывает на следующий день к выполнению.
"""

from typing import Optional, Sequence, TypeVar

DayT = TypeVar("DayT")


class PlanHasNoDaysError(ValueError):
    """План без дней нельзя продвинуть"""

    def __init__(self, plan_id: Optional[int] = None):
        self.plan_id = plan_id
        super().__init__(f"Workout plan {plan_id} has no days to advance through")


def next_day_index(current_day_index: int, day_count: int, plan_id: Optional[int] = None) -> int:
    if day_count <= 0:
        raise PlanHasNoDaysError(plan_id)
    return (current_day_index + 1) % day_count


def resolve_current_day(days: Sequence[DayT], current_day_index: int) -> Optional[DayT]:
    """Найти день под курсором.

    Если дня с таким индексом нет (план укоротили), курсор заворачивается
    по модулю количества дней.
    """
    if not days:
        return None

    for day in days:
        if day.day_index == current_day_index:
            return day

    ordered = sorted(days, key=lambda d: d.day_index)
    return ordered[current_day_index % len(ordered)]
