from app.models.user import User
from app.models.workout import Workout, Exercise, WorkoutSet, WorkoutTypeEnum
from app.models.meal import Meal
from app.models.insight import Insight
from app.models.workout_plan import WorkoutPlan, WorkoutPlanDay
from app.models.user_goals import UserGoals
from app.models.exercise_library import ExerciseDatabase

__all__ = [
    "User",
    "Workout", "Exercise", "WorkoutSet", "WorkoutTypeEnum",
    "Meal",
    "Insight",
    "WorkoutPlan", "WorkoutPlanDay",
    "UserGoals",
    "ExerciseDatabase",
]
