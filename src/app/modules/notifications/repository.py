"""
Notification Repository
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.notifications.models import Notification, NotificationType


class NotificationRepository:
    """Repository for notification database operations."""

    @staticmethod
    async def create(db: AsyncSession, notification: Notification) -> Notification:
        db.add(notification)
        await db.commit()
        await db.refresh(notification)
        return notification

    @staticmethod
    async def save(db: AsyncSession, notification: Notification) -> Notification:
        await db.commit()
        await db.refresh(notification)
        return notification

    @staticmethod
    async def get_by_id(db: AsyncSession, notification_id: UUID) -> Notification | None:
        return await db.get(Notification, notification_id)

    @staticmethod
    async def find(
        db: AsyncSession,
        *,
        type: NotificationType | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        skip: int = 0,
        limit: int = 50,
    ) -> tuple[list[Notification], int]:
        """Newest first. Both timestamp bounds are inclusive."""
        query = select(Notification)
        if type:
            query = query.where(Notification.type == type)
        if start:
            query = query.where(Notification.timestamp >= start)
        if end:
            query = query.where(Notification.timestamp <= end)

        total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar() or 0

        result = await db.execute(
            query.order_by(desc(Notification.timestamp)).offset(skip).limit(limit)
        )
        return list(result.scalars().all()), total

    @staticmethod
    async def delete(db: AsyncSession, notification: Notification) -> None:
        await db.delete(notification)
        await db.commit()

    @staticmethod
    async def delete_all(db: AsyncSession, commit: bool = True) -> int:
        result = await db.execute(delete(Notification))
        if commit:
            await db.commit()
        return result.rowcount or 0

    @staticmethod
    async def replace_all(db: AsyncSession, notifications: list[Notification]) -> list[Notification]:
        """Delete every notification and insert ``notifications`` in one transaction."""
        await NotificationRepository.delete_all(db, commit=False)
        db.add_all(notifications)
        await db.commit()
        for notification in notifications:
            await db.refresh(notification)
        return notifications
