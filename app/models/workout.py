import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Boolean, Numeric, JSON
from sqlalchemy.orm import relationship
from app.core.base import Base


class WorkoutTypeEnum(str, enum.Enum):
    strength = "strength"
    cardio = "cardio"


class Workout(Base):
    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    plan_id = Column(Integer, ForeignKey("workout_plans.id", ondelete="SET NULL"), nullable=True)
    plan_day_id = Column(Integer, ForeignKey("workout_plan_days.id", ondelete="SET NULL"), nullable=True)
    type = Column(String, nullable=False)  # running, cycling, strength, swimming ...
    workout_type = Column(String, nullable=False, default=WorkoutTypeEnum.cardio.value)
    duration = Column(Integer, nullable=False)  # минуты
    distance = Column(Numeric(8, 2), nullable=True)
    calories_burned = Column(Integer, nullable=True)
    notes = Column(String, nullable=True)
    tags = Column(JSON, nullable=True)
    date = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="workouts")
    plan = relationship("WorkoutPlan", back_populates="workouts")
    plan_day = relationship("WorkoutPlanDay", back_populates="workouts")
    exercises = relationship(
        "Exercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="Exercise.id",
    )

    @property
    def is_strength(self) -> bool:
        return self.workout_type == WorkoutTypeEnum.strength.value


class Exercise(Base):
    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True)
    workout_id = Column(Integer, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=True)  # chest, legs, back ...
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    workout = relationship("Workout", back_populates="exercises")
    sets = relationship(
        "WorkoutSet",
        back_populates="exercise",
        cascade="all, delete-orphan",
        order_by="WorkoutSet.set_number",
    )


class WorkoutSet(Base):
    __tablename__ = "sets"

    id = Column(Integer, primary_key=True)
    exercise_id = Column(Integer, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False, index=True)
    set_number = Column(Integer, nullable=False)  # 1, 2, 3 ...
    reps = Column(Integer, nullable=False)
    weight = Column(Numeric(6, 2), nullable=True)
    is_warmup = Column(Boolean, default=False, nullable=False)
    rest_time = Column(Integer, nullable=True)  # секунды между подходами
    rpe = Column(Integer, nullable=True)  # Rate of Perceived Exertion (1-10)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    exercise = relationship("Exercise", back_populates="sets")
