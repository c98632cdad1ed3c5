from datetime import datetime
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, Field, field_validator

from app.models.workout import Workout, WorkoutTypeEnum
from app.schemas.common import to_naive_utc, reject_null


class SetCreate(BaseModel):
    reps: int = Field(ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    is_warmup: bool = False
    rest_time: Optional[int] = Field(default=None, ge=0, description="Отдых после подхода, секунды")
    rpe: Optional[int] = Field(default=None, ge=1, le=10)

class ExerciseCreate(BaseModel):
    name: str = Field(min_length=1)
    category: Optional[str] = None
    notes: Optional[str] = None
    sets: List[SetCreate] = []

class WorkoutCreate(BaseModel):
    type: str = Field(min_length=1)
    workout_type: WorkoutTypeEnum = WorkoutTypeEnum.cardio
    duration: int = Field(gt=0, description="Длительность, минуты")
    distance: Optional[float] = Field(default=None, ge=0)
    calories_burned: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None
    tags: Optional[List[str]] = None
    date: datetime = Field(default_factory=datetime.utcnow)
    plan_id: Optional[int] = None
    plan_day_id: Optional[int] = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value):
        return to_naive_utc(value)

class WorkoutUpdate(BaseModel):
    type: Optional[str] = Field(default=None, min_length=1)
    workout_type: Optional[WorkoutTypeEnum] = None
    duration: Optional[int] = Field(default=None, gt=0)
    distance: Optional[float] = Field(default=None, ge=0)
    calories_burned: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None
    tags: Optional[List[str]] = None
    date: Optional[datetime] = None
    plan_id: Optional[int] = None
    plan_day_id: Optional[int] = None

    @field_validator("type", "workout_type", "duration", "date", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value):
        return to_naive_utc(value)

class WorkoutCreateRequest(BaseModel):
    workout: WorkoutCreate
    exercises: Optional[List[ExerciseCreate]] = None

class WorkoutUpdateRequest(BaseModel):
    workout: WorkoutUpdate = Field(default_factory=WorkoutUpdate)
    # Для силовой тренировки это полный новый список упражнений, а не дополнение
    exercises: Optional[List[ExerciseCreate]] = None

class SetRead(BaseModel):
    id: int
    exercise_id: int
    set_number: int
    reps: int
    weight: Optional[float] = None
    is_warmup: bool
    rest_time: Optional[int] = None
    rpe: Optional[int] = None

    class Config:
        from_attributes = True

class ExerciseRead(BaseModel):
    id: int
    workout_id: int
    name: str
    category: Optional[str] = None
    notes: Optional[str] = None
    sets: List[SetRead] = []

    class Config:
        from_attributes = True

class WorkoutRead(BaseModel):
    id: int
    user_id: int
    plan_id: Optional[int] = None
    plan_day_id: Optional[int] = None
    type: str
    workout_type: WorkoutTypeEnum
    duration: int
    distance: Optional[float] = None
    calories_burned: Optional[int] = None
    notes: Optional[str] = None
    tags: Optional[List[str]] = None
    date: datetime
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class StrengthWorkoutRead(WorkoutRead):
    exercises: List[ExerciseRead] = []

class WorkoutStats(BaseModel):
    total_workouts: int = 0
    total_minutes: int = 0
    total_calories: int = 0
    avg_duration: int = 0


def serialize_workout(workout: Workout) -> Dict[str, Any]:
    """Силовая тренировка отдается вместе с упражнениями и подходами, кардио - без поля exercises"""
    if workout.is_strength:
        return StrengthWorkoutRead.model_validate(workout).model_dump(mode="json")
    return WorkoutRead.model_validate(workout).model_dump(mode="json")
