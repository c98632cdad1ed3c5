from typing import Optional, List, Dict, Any

from sqlalchemy import select, delete, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.exercise_library import ExerciseDatabase


class ExerciseLibraryRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def search(
            self,
            search: Optional[str] = None,
            primary_muscle: Optional[str] = None,
            equipment: Optional[str] = None,
            level: Optional[str] = None,
            limit: int = 100,
    ) -> List[ExerciseDatabase]:
        """Поиск по справочнику: все переданные фильтры объединяются через AND"""
        query = select(ExerciseDatabase).order_by(ExerciseDatabase.name)

        if search:
            # % и _ в запросе ищутся как обычные символы
            query = query.where(or_(
                ExerciseDatabase.name.icontains(search, autoescape=True),
                ExerciseDatabase.id.icontains(search, autoescape=True),
            ))
        if equipment:
            query = query.where(ExerciseDatabase.equipment == equipment)
        if level:
            query = query.where(ExerciseDatabase.level == level)

        if not primary_muscle:
            result = await self.db.execute(query.limit(limit))
            return list(result.scalars().all())

        # primary_muscles хранится как JSON-список, членство проверяем после выборки
        result = await self.db.execute(query)
        matches = [
            exercise for exercise in result.scalars().all()
            if primary_muscle in (exercise.primary_muscles or [])
        ]
        return matches[:limit]

    async def get_by_id(self, exercise_id: str) -> Optional[ExerciseDatabase]:
        result = await self.db.execute(
            select(ExerciseDatabase).where(ExerciseDatabase.id == exercise_id)
        )
        return result.scalar_one_or_none()

    async def replace_all(self, exercises: List[Dict[str, Any]], batch_size: int = 100) -> int:
        """Полностью перезаписать справочник (используется скриптом загрузки)"""
        await self.db.execute(delete(ExerciseDatabase))

        inserted = 0
        for start in range(0, len(exercises), batch_size):
            batch = exercises[start:start + batch_size]
            self.db.add_all([
                ExerciseDatabase(
                    id=item["id"],
                    name=item["name"],
                    force=item.get("force") or None,
                    level=item.get("level") or None,
                    mechanic=item.get("mechanic") or None,
                    equipment=item.get("equipment") or None,
                    primary_muscles=item.get("primaryMuscles") or [],
                    secondary_muscles=item.get("secondaryMuscles") or [],
                    instructions=item.get("instructions") or [],
                    category=item.get("category") or None,
                    images=item.get("images") or [],
                )
                for item in batch
            ])
            await self.db.flush()
            inserted += len(batch)

        await self.db.commit()
        return inserted
