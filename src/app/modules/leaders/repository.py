"""
Leader Repository
"""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.leaders.models import Leader


class LeaderRepository:
    """Repository for leader database operations."""

    @staticmethod
    async def create(db: AsyncSession, leader: Leader) -> Leader:
        db.add(leader)
        await db.commit()
        await db.refresh(leader)
        return leader

    @staticmethod
    async def save(db: AsyncSession, leader: Leader) -> Leader:
        await db.commit()
        await db.refresh(leader)
        return leader

    @staticmethod
    async def delete(db: AsyncSession, leader: Leader) -> None:
        await db.delete(leader)
        await db.commit()

    @staticmethod
    async def get_by_leader_id(db: AsyncSession, leader_id: int) -> Leader | None:
        result = await db.execute(select(Leader).where(Leader.leader_id == leader_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Leader | None:
        result = await db.execute(select(Leader).where(Leader.email == email.lower()))
        return result.scalar_one_or_none()

    @staticmethod
    async def find_conflict(db: AsyncSession, leader_id: int, email: str) -> Leader | None:
        """A leader already holding ``leader_id`` or ``email``."""
        result = await db.execute(
            select(Leader)
            .where(or_(Leader.leader_id == leader_id, Leader.email == email.lower()))
            .limit(1)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def list_all(db: AsyncSession) -> list[Leader]:
        result = await db.execute(select(Leader).order_by(Leader.leader_id))
        return list(result.scalars().all())
