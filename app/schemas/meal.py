from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict
from datetime import datetime

from app.schemas.common import to_naive_utc, reject_null


class MealCreate(BaseModel):
    type: str = Field(min_length=1, description="breakfast, lunch, dinner, snack")
    food_items: str = Field(min_length=1)
    calories: int = Field(ge=0)
    protein: Optional[float] = Field(default=None, ge=0)
    carbs: Optional[float] = Field(default=None, ge=0)
    fat: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None
    date: datetime = Field(default_factory=datetime.utcnow)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value):
        return to_naive_utc(value)


class MealUpdate(BaseModel):
    type: Optional[str] = Field(default=None, min_length=1)
    food_items: Optional[str] = Field(default=None, min_length=1)
    calories: Optional[int] = Field(default=None, ge=0)
    protein: Optional[float] = Field(default=None, ge=0)
    carbs: Optional[float] = Field(default=None, ge=0)
    fat: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None
    date: Optional[datetime] = None

    @field_validator("type", "food_items", "calories", "date", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value):
        return to_naive_utc(value)


class MealRead(BaseModel):
    id: int
    user_id: int
    type: str
    food_items: str
    calories: int
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None
    notes: Optional[str] = None
    date: datetime
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MealStats(BaseModel):
    total_meals: int = 0
    total_calories: int = 0
    avg_calories: int = 0
    nutrition_breakdown: Dict[str, int] = {"protein": 0, "carbs": 0, "fat": 0}
