from datetime import datetime, timezone
from typing import Optional


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """В БД даты хранятся без таймзоны, в UTC"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def reject_null(value):
    """Для частичного обновления: поле можно не передавать, но нельзя обнулить"""
    if value is None:
        raise ValueError("Поле не может быть null")
    return value
