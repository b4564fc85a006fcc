"""
Tests for event scheduling rules.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, patch

import pytest

from app.core.exceptions import ValidationError
from app.modules.events.models import Event
from app.modules.events.schemas import EventCreate, EventUpdate
from app.modules.events.service import (
    DuplicateEventError,
    EventNotFoundError,
    create_event,
    ensure_capacity,
    ensure_future_date,
    get_event,
    update_event,
)

REPO = "app.modules.events.service.EventRepository"


@pytest.fixture
def mock_db():
    return AsyncMock()


@pytest.fixture
def event_data():
    return {
        "event_id": 7,
        "title": "Open Day",
        "description": "Campus tour and program talks",
        "image": "/uploads/events/open-day.jpg",
        "date": datetime.now(UTC) + timedelta(days=30),
        "time": "09:00 - 15:00",
        "location": "Main Hall",
        "category": "Admissions",
        "max_attendees": 200,
    }


@pytest.fixture
def event(event_data):
    return Event(**event_data, attendees=150, is_active=True)


def _echo(db, event):
    return event


class TestDateAndCapacityRules:
    def test_naive_date_taken_as_utc(self):
        now = datetime(2025, 6, 1, tzinfo=UTC)
        result = ensure_future_date(datetime(2025, 7, 1, 10, 0), now=now)

        assert result == datetime(2025, 7, 1, 10, 0, tzinfo=UTC)

    def test_past_date_rejected(self):
        now = datetime(2025, 6, 1, tzinfo=UTC)
        with pytest.raises(ValidationError) as exc_info:
            ensure_future_date(datetime(2025, 5, 31, tzinfo=UTC), now=now)

        assert exc_info.value.fields == ["date"]

    def test_capacity_equal_to_attendees_allowed(self):
        ensure_capacity(150, 150)

    def test_capacity_below_attendees_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ensure_capacity(100, 150)

        assert exc_info.value.fields == ["max_attendees"]


class TestCreateEvent:
    @pytest.mark.asyncio
    async def test_new_event_starts_empty_and_active(self, mock_db, event_data):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_event_id = AsyncMock(return_value=None)
            mock_repo.create = AsyncMock(side_effect=_echo)

            result = await create_event(mock_db, EventCreate(**event_data))

        assert result.attendees == 0
        assert result.is_active is True
        assert result.event_id == 7

    @pytest.mark.asyncio
    async def test_duplicate_event_id(self, mock_db, event_data, event):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_event_id = AsyncMock(return_value=event)
            mock_repo.create = AsyncMock()

            with pytest.raises(DuplicateEventError) as exc_info:
                await create_event(mock_db, EventCreate(**event_data))

        assert exc_info.value.status_code == 409
        mock_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_past_date_rejected_before_lookup(self, mock_db, event_data):
        event_data["date"] = datetime.now(UTC) - timedelta(days=1)
        with patch(REPO) as mock_repo:
            mock_repo.get_by_event_id = AsyncMock()

            with pytest.raises(ValidationError):
                await create_event(mock_db, EventCreate(**event_data))

        mock_repo.get_by_event_id.assert_not_called()


class TestUpdateEvent:
    @pytest.mark.asyncio
    async def test_capacity_checked_against_current_attendees(self, mock_db, event):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_event_id = AsyncMock(return_value=event)
            mock_repo.save = AsyncMock()

            with pytest.raises(ValidationError):
                await update_event(mock_db, 7, EventUpdate(max_attendees=100))

        assert event.max_attendees == 200
        mock_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_partial_update(self, mock_db, event):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_event_id = AsyncMock(return_value=event)
            mock_repo.save = AsyncMock(side_effect=_echo)

            result = await update_event(mock_db, 7, EventUpdate(location="Library", attendees=180))

        assert result.location == "Library"
        assert result.attendees == 180
        assert result.title == "Open Day"

    @pytest.mark.asyncio
    async def test_missing_event(self, mock_db):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_event_id = AsyncMock(return_value=None)

            with pytest.raises(EventNotFoundError):
                await update_event(mock_db, 99, EventUpdate(title="x"))


class TestGetEvent:
    @pytest.mark.asyncio
    async def test_only_active_events_resolve(self, mock_db):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_event_id = AsyncMock(return_value=None)

            with pytest.raises(EventNotFoundError) as exc_info:
                await get_event(mock_db, 7)

        mock_repo.get_by_event_id.assert_awaited_once_with(mock_db, 7, active_only=True)
        assert exc_info.value.status_code == 404
