from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Boolean, JSON
from sqlalchemy.orm import relationship
from app.core.base import Base


class WorkoutPlan(Base):
    """Сплит тренировок (Push/Pull/Legs, Upper/Lower ...) с курсором текущего дня"""
    __tablename__ = "workout_plans"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    days_per_week = Column(Integer, nullable=False)
    current_day_index = Column(Integer, default=0, nullable=False)  # следующий день к выполнению
    last_workout_date = Column(DateTime, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="workout_plans")
    days = relationship(
        "WorkoutPlanDay",
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="WorkoutPlanDay.day_index",
    )
    workouts = relationship("Workout", back_populates="plan")


class WorkoutPlanDay(Base):
    __tablename__ = "workout_plan_days"

    id = Column(Integer, primary_key=True)
    plan_id = Column(Integer, ForeignKey("workout_plans.id", ondelete="CASCADE"), nullable=False, index=True)
    day_index = Column(Integer, nullable=False)  # 0-based позиция дня в сплите
    name = Column(String, nullable=False)  # Push Day, Pull Day, Leg Day
    description = Column(String, nullable=True)
    muscle_groups = Column(JSON, nullable=True)  # ["chest", "triceps", "shoulders"]
    exercises = Column(JSON, nullable=True)
    rest_day = Column(Boolean, default=False, nullable=False)

    plan = relationship("WorkoutPlan", back_populates="days")
    workouts = relationship("Workout", back_populates="plan_day")
