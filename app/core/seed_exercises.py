"""
Скрипт загрузки справочника упражнений (free-exercise-db) в базу данных
"""
import asyncio
import logging

import httpx

from app.core.config import settings
from app.core.database import init_database
from app.core.db import AsyncSessionLocal
from app.core.logging import setup_logging
from app.repositories.exercise_library_repository import ExerciseLibraryRepository

logger = logging.getLogger(__name__)


async def fetch_catalog(url: str = None) -> list:
    """Скачать каталог упражнений в исходном формате (camelCase ключи)"""
    url = url or settings.EXERCISE_CATALOG_URL
    async with httpx.AsyncClient() as client:
        response = await client.get(url, timeout=60.0)
        response.raise_for_status()
        return response.json()


async def seed_exercises(url: str = None) -> int:
    """Полностью перезаписать справочник упражнений"""
    exercises = await fetch_catalog(url)
    logger.info("Загружаем %d упражнений из %s", len(exercises), url or settings.EXERCISE_CATALOG_URL)

    async with AsyncSessionLocal() as db:
        repo = ExerciseLibraryRepository(db)
        inserted = await repo.replace_all(exercises)

    logger.info("Справочник упражнений обновлен: %d записей", inserted)
    return inserted


async def main():
    setup_logging()
    await init_database()
    await seed_exercises()


if __name__ == "__main__":
    asyncio.run(main())
