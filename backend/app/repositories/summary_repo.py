"""Data access for stored summaries (append-only)."""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.summary import Summary


class SummaryRepository:
    """Repository for the summaries table."""

    async def create(self, session: AsyncSession, input_text: str, summary: str) -> Summary:
        record = Summary(input_text=input_text, summary=summary)
        session.add(record)
        await session.flush()
        return record

    async def list_recent(self, session: AsyncSession, limit: int = 100) -> List[Summary]:
        """Newest first, capped at `limit` rows."""
        result = await session.execute(
            select(Summary)
            .order_by(Summary.created_at.desc(), Summary.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get(self, session: AsyncSession, summary_id: int) -> Optional[Summary]:
        result = await session.execute(select(Summary).where(Summary.id == summary_id))
        return result.scalar_one_or_none()

    async def count(self, session: AsyncSession) -> int:
        result = await session.execute(select(func.count(Summary.id)))
        return result.scalar() or 0


summary_repository = SummaryRepository()
