from typing import List, Dict, Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.insight import Insight


class InsightRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_insights(self, user_id: int, limit: int = 20) -> List[Insight]:
        result = await self.db.execute(
            select(Insight)
            .where(Insight.user_id == user_id)
            .order_by(Insight.created_at.desc(), Insight.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def create_insights(self, user_id: int, items: List[Dict[str, Any]]) -> List[Insight]:
        """Сохранить пачку сгенерированных инсайтов одним коммитом"""
        insights = [
            Insight(
                user_id=user_id,
                type=item["type"],
                title=item["title"],
                content=item["content"],
                data=item.get("data"),
                is_read=False,
            )
            for item in items
        ]
        self.db.add_all(insights)
        await self.db.commit()
        for insight in insights:
            await self.db.refresh(insight)
        return insights

    async def mark_as_read(self, insight_id: int, user_id: int) -> bool:
        result = await self.db.execute(
            update(Insight)
            .where(Insight.id == insight_id, Insight.user_id == user_id)
            .values(is_read=True)
        )
        await self.db.commit()
        return (result.rowcount or 0) > 0
