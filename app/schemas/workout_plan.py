from datetime import datetime
from typing import Optional, List, Any

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import reject_null


class WorkoutPlanDayCreate(BaseModel):
    # day_index от клиента игнорируется: индекс равен позиции дня в списке
    day_index: Optional[int] = None
    name: str = Field(min_length=1)
    description: Optional[str] = None
    muscle_groups: List[str] = []
    exercises: Optional[Any] = None
    rest_day: bool = False

class WorkoutPlanCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    days_per_week: int = Field(ge=1, le=7)

class WorkoutPlanCreateRequest(BaseModel):
    plan: WorkoutPlanCreate
    days: List[WorkoutPlanDayCreate] = Field(min_length=1)

class WorkoutPlanUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    days_per_week: Optional[int] = Field(default=None, ge=1, le=7)
    current_day_index: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None

    @field_validator("name", "days_per_week", "current_day_index", "is_active", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

class WorkoutPlanDayRead(BaseModel):
    id: int
    plan_id: int
    day_index: int
    name: str
    description: Optional[str] = None
    muscle_groups: Optional[List[str]] = None
    exercises: Optional[Any] = None
    rest_day: bool

    class Config:
        from_attributes = True

class WorkoutPlanRead(BaseModel):
    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    days_per_week: int
    current_day_index: int
    last_workout_date: Optional[datetime] = None
    is_active: bool
    created_at: Optional[datetime] = None
    days: List[WorkoutPlanDayRead] = []

    class Config:
        from_attributes = True

class AdvancePlanResponse(BaseModel):
    advanced: bool
    plan: Optional[WorkoutPlanRead] = None
