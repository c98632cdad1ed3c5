from datetime import datetime

from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.core.base import Base

class UserGoals(Base):
    __tablename__ = "user_goals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    weekly_workout_goal = Column(Integer, default=4, nullable=False)
    daily_calorie_goal = Column(Integer, default=2000, nullable=False)
    hydration_goal = Column(Integer, default=8, nullable=False)  # стаканов в день
    weight_goal = Column(Numeric(5, 2), nullable=True)
    target_body_fat = Column(Numeric(4, 1), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="goals")
