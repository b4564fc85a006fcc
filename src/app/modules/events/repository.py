"""
Event Repository
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.events.models import Event


class EventRepository:
    """Repository for event database operations."""

    @staticmethod
    async def create(db: AsyncSession, event: Event) -> Event:
        db.add(event)
        await db.commit()
        await db.refresh(event)
        return event

    @staticmethod
    async def save(db: AsyncSession, event: Event) -> Event:
        await db.commit()
        await db.refresh(event)
        return event

    @staticmethod
    async def delete(db: AsyncSession, event: Event) -> None:
        await db.delete(event)
        await db.commit()

    @staticmethod
    async def get_by_event_id(
        db: AsyncSession, event_id: int, active_only: bool = False
    ) -> Event | None:
        query = select(Event).where(Event.event_id == event_id)
        if active_only:
            query = query.where(Event.is_active.is_(True))
        result = await db.execute(query)
        return result.scalar_one_or_none()

    @staticmethod
    async def list_active(db: AsyncSession) -> list[Event]:
        result = await db.execute(
            select(Event).where(Event.is_active.is_(True)).order_by(Event.date)
        )
        return list(result.scalars().all())
