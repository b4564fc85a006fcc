"""
Tests for the notification feed service.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from app.modules.notifications.models import Notification, NotificationType
from app.modules.notifications.schemas import NotificationCreate, NotificationUpdate
from app.modules.notifications.service import (
    SAMPLE_NOTIFICATIONS,
    NotificationNotFoundError,
    create_notification,
    list_notifications,
    seed_notifications,
    update_notification,
)

REPO = "app.modules.notifications.service.NotificationRepository"


@pytest.fixture
def mock_db():
    return AsyncMock()


def _echo(db, value):
    return value


class TestCreateNotification:
    @pytest.mark.asyncio
    async def test_explicit_timestamp_kept(self, mock_db):
        when = datetime(2025, 4, 1, 8, 0, tzinfo=UTC)
        data = NotificationCreate(
            title=" Backup ", message="Done", type=NotificationType.SUCCESS, timestamp=when
        )
        with patch(REPO) as mock_repo:
            mock_repo.create = AsyncMock(side_effect=_echo)

            result = await create_notification(mock_db, data)

        assert result.title == "Backup"
        assert result.timestamp == when


class TestListNotifications:
    @pytest.mark.asyncio
    async def test_filters_forwarded(self, mock_db):
        start = datetime(2025, 1, 1, tzinfo=UTC)
        with patch(REPO) as mock_repo:
            mock_repo.find = AsyncMock(return_value=([], 0))

            await list_notifications(
                mock_db, type=NotificationType.ERROR, start=start, page=2, limit=50
            )

        mock_repo.find.assert_awaited_once_with(
            mock_db, type=NotificationType.ERROR, start=start, end=None, skip=50, limit=50
        )


class TestUpdateNotification:
    @pytest.mark.asyncio
    async def test_only_sent_fields_change(self, mock_db):
        notification = Notification(
            id=uuid4(), title="Old", message="Body", type=NotificationType.INFO
        )
        with patch(REPO) as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=notification)
            mock_repo.save = AsyncMock(side_effect=_echo)

            result = await update_notification(
                mock_db, notification.id, NotificationUpdate(type=NotificationType.WARNING)
            )

        assert result.type == NotificationType.WARNING
        assert result.title == "Old"

    @pytest.mark.asyncio
    async def test_missing(self, mock_db):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=None)

            with pytest.raises(NotificationNotFoundError):
                await update_notification(mock_db, uuid4(), NotificationUpdate(title="x"))


class TestSeedNotifications:
    @pytest.mark.asyncio
    async def test_replaces_with_sample_set(self, mock_db):
        with patch(REPO) as mock_repo:
            mock_repo.replace_all = AsyncMock(side_effect=_echo)

            seeded = await seed_notifications(mock_db)

        assert len(seeded) == len(SAMPLE_NOTIFICATIONS) == 5
        assert {n.type for n in seeded} == set(NotificationType)
        assert all(n.timestamp.tzinfo is not None for n in seeded)
        mock_repo.replace_all.assert_awaited_once()
