from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class UserGoalsUpdate(BaseModel):
    weekly_workout_goal: int = Field(default=4, ge=1, le=14)
    daily_calorie_goal: int = Field(default=2000, ge=800, le=10000)
    hydration_goal: int = Field(default=8, ge=1, le=30)
    weight_goal: Optional[float] = Field(default=None, gt=0)
    target_body_fat: Optional[float] = Field(default=None, ge=5, le=50)

class UserGoalsRead(BaseModel):
    id: Optional[int] = None
    user_id: int
    weekly_workout_goal: int = 4
    daily_calorie_goal: int = 2000
    hydration_goal: int = 8
    weight_goal: Optional[float] = None
    target_body_fat: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
