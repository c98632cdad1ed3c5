import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.core import init_database, settings
from app.core.logging import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="FitTrack - personal fitness and nutrition tracker")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    await init_database()
    logger.info("Приложение запущено!")


@app.get("/")
async def root():
    return {
        "app": "FitTrack",
        "message": "FitTrack - personal fitness and nutrition tracker",
        "links": {
            "workouts": "/api/workouts",
            "meals": "/api/meals",
            "insights": "/api/insights",
            "workout_plans": "/api/workout-plans",
            "user_goals": "/api/user-goals",
            "exercises": "/api/exercises",
            "docs": "/docs",
        }
    }


@app.get("/health")
async def health():
    return {"status": "ok"}
