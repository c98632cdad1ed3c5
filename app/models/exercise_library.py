from sqlalchemy import Column, String, JSON, Index
from app.core.base import Base


class ExerciseDatabase(Base):
    """Справочник упражнений (free-exercise-db). Заполняется скриптом seed_exercises"""
    __tablename__ = "exercise_database"

    id = Column(String, primary_key=True)  # стабильный ключ вида "Barbell_Squat"
    name = Column(String, nullable=False, index=True)
    force = Column(String, nullable=True)
    level = Column(String, nullable=True)
    mechanic = Column(String, nullable=True)
    equipment = Column(String, nullable=True)
    primary_muscles = Column(JSON, default=list)
    secondary_muscles = Column(JSON, default=list)
    instructions = Column(JSON, default=list)
    category = Column(String, nullable=True)
    images = Column(JSON, default=list)

    __table_args__ = (
        Index('idx_exercise_equipment', 'equipment'),
        Index('idx_exercise_level', 'level'),
    )
