"""
Notification Service Layer
"""

import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.modules.notifications.models import Notification, NotificationType
from app.modules.notifications.repository import NotificationRepository
from app.modules.notifications.schemas import NotificationCreate, NotificationUpdate

logger = logging.getLogger(__name__)

SAMPLE_NOTIFICATIONS = [
    (
        "Storage Warning",
        "Gallery storage is reaching 85% capacity",
        NotificationType.WARNING,
        datetime(2024, 1, 15, 9, 15, tzinfo=UTC),
    ),
    (
        "New Image Uploaded",
        'Gallery item "Sunset View" has been successfully uploaded',
        NotificationType.SUCCESS,
        datetime(2024, 1, 15, 10, 30, tzinfo=UTC),
    ),
    (
        "System Update",
        "New gallery features available in v2.1.0",
        NotificationType.INFO,
        datetime(2024, 1, 14, 16, 45, tzinfo=UTC),
    ),
    (
        "Failed Upload",
        'Unable to process image "beach.jpg" - Invalid format',
        NotificationType.ERROR,
        datetime(2024, 1, 14, 14, 20, tzinfo=UTC),
    ),
    (
        "Backup Completed",
        "Gallery backup has been successfully completed",
        NotificationType.SUCCESS,
        datetime(2024, 1, 12, 8, 30, tzinfo=UTC),
    ),
]


class NotificationNotFoundError(NotFoundError):
    def __init__(self, notification_id: UUID | None = None):
        super().__init__(
            resource="Notification",
            identifier=notification_id,
            error_code="NOTIFICATION_NOT_FOUND",
        )


async def list_notifications(
    db: AsyncSession,
    *,
    type: NotificationType | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
    page: int = 1,
    limit: int = 50,
) -> tuple[list[Notification], int]:
    return await NotificationRepository.find(
        db, type=type, start=start, end=end, skip=(page - 1) * limit, limit=limit
    )


async def get_notification(db: AsyncSession, notification_id: UUID) -> Notification:
    notification = await NotificationRepository.get_by_id(db, notification_id)
    if not notification:
        raise NotificationNotFoundError(notification_id)
    return notification


async def create_notification(db: AsyncSession, data: NotificationCreate) -> Notification:
    notification = Notification(title=data.title, message=data.message, type=data.type)
    if data.timestamp:
        notification.timestamp = data.timestamp
    notification = await NotificationRepository.create(db, notification)
    logger.info(f"Created {notification.type.value} notification {notification.id}")
    return notification


async def update_notification(
    db: AsyncSession, notification_id: UUID, data: NotificationUpdate
) -> Notification:
    notification = await get_notification(db, notification_id)
    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(notification, field, value)
    return await NotificationRepository.save(db, notification)


async def delete_notification(db: AsyncSession, notification_id: UUID) -> Notification:
    notification = await get_notification(db, notification_id)
    await NotificationRepository.delete(db, notification)
    return notification


async def clear_notifications(db: AsyncSession) -> int:
    deleted = await NotificationRepository.delete_all(db)
    logger.info(f"Cleared {deleted} notifications")
    return deleted


async def seed_notifications(db: AsyncSession) -> list[Notification]:
    """Replace every notification with the sample set."""
    notifications = [
        Notification(title=title, message=message, type=type_, timestamp=timestamp)
        for title, message, type_, timestamp in SAMPLE_NOTIFICATIONS
    ]
    return await NotificationRepository.replace_all(db, notifications)
