from datetime import datetime

from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.core.base import Base

class Meal(Base):
    __tablename__ = "meals"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String, nullable=False)  # breakfast, lunch, dinner, snack
    food_items = Column(String, nullable=False)
    calories = Column(Integer, nullable=False)
    protein = Column(Numeric(5, 2), nullable=True)
    carbs = Column(Numeric(5, 2), nullable=True)
    fat = Column(Numeric(5, 2), nullable=True)
    notes = Column(String, nullable=True)
    date = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="meals")
