from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql://fittrack_user:fittrack_password@db:5432/fittrack_db"
    SECRET_KEY: str = "SECRET_KEY_FOR_FITTRACK"
    # При продакшн/обычной разработке лучше не пересоздавать БД на каждом старте
    RESET_DATABASE: bool = False
    DB_ECHO: bool = False
    LOG_LEVEL: str = "INFO"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    GROQ_API_KEY: str = ""
    AI_BASE_URL: str = "https://api.groq.com/openai/v1/chat/completions"
    AI_MODEL: str = "llama-3.3-70b-versatile"

    EXERCISE_CATALOG_URL: str = (
        "https://raw.githubusercontent.com/yuhonas/free-exercise-db/main/dist/exercises.json"
    )

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

settings = Settings()
