from fastapi import APIRouter
from app.api.v1.auth import router as auth_router
from app.api.v1.workouts import router as workouts_router
from app.api.v1.meals import router as meals_router
from app.api.v1.insights import router as insights_router
from app.api.v1.workout_plans import router as workout_plans_router
from app.api.v1.goals import router as goals_router
from app.api.v1.exercises import router as exercises_router

api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(workouts_router, prefix="/workouts", tags=["workouts"])
api_router.include_router(meals_router, prefix="/meals", tags=["meals"])
api_router.include_router(insights_router, prefix="/insights", tags=["insights"])
api_router.include_router(workout_plans_router, prefix="/workout-plans", tags=["workout-plans"])
api_router.include_router(goals_router, prefix="/user-goals", tags=["user-goals"])
api_router.include_router(exercises_router, prefix="/exercises", tags=["exercises"])
