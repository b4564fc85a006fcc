"""
Event Service Layer

Events are scheduled in the future; capacity never drops below the
current attendee count.
"""

import logging
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.modules.events.models import Event
from app.modules.events.repository import EventRepository
from app.modules.events.schemas import EventCreate, EventUpdate

logger = logging.getLogger(__name__)


class EventNotFoundError(NotFoundError):
    def __init__(self, event_id: int | None = None):
        super().__init__(resource="Event", identifier=event_id, error_code="EVENT_NOT_FOUND")


class DuplicateEventError(ConflictError):
    def __init__(self, event_id: int):
        super().__init__(
            message=f"Event with ID {event_id} already exists", error_code="DUPLICATE_EVENT"
        )


def ensure_future_date(value: datetime, now: datetime | None = None) -> datetime:
    """
    Reject dates in the past. Naive datetimes are taken as UTC.

    Raises:
        ValidationError: If ``value`` is before ``now``
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    if value < (now or datetime.now(UTC)):
        raise ValidationError("Event date must be in the future", fields=["date"])
    return value


def ensure_capacity(max_attendees: int, attendees: int) -> None:
    if max_attendees < attendees:
        raise ValidationError(
            "Max attendees cannot be less than current attendees", fields=["max_attendees"]
        )


async def list_events(db: AsyncSession) -> list[Event]:
    return await EventRepository.list_active(db)


async def get_event(db: AsyncSession, event_id: int) -> Event:
    """Get an active event."""
    event = await EventRepository.get_by_event_id(db, event_id, active_only=True)
    if not event:
        raise EventNotFoundError(event_id)
    return event


async def create_event(db: AsyncSession, data: EventCreate) -> Event:
    date = ensure_future_date(data.date)
    if await EventRepository.get_by_event_id(db, data.event_id):
        raise DuplicateEventError(data.event_id)

    event = Event(**data.model_dump(exclude={"date"}), date=date, attendees=0, is_active=True)
    event = await EventRepository.create(db, event)
    logger.info(f"Created event {event.event_id}")
    return event


async def update_event(db: AsyncSession, event_id: int, data: EventUpdate) -> Event:
    event = await EventRepository.get_by_event_id(db, event_id)
    if not event:
        raise EventNotFoundError(event_id)

    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if "date" in changes:
        changes["date"] = ensure_future_date(changes["date"])
    ensure_capacity(
        changes.get("max_attendees", event.max_attendees),
        changes.get("attendees", event.attendees),
    )

    for field, value in changes.items():
        setattr(event, field, value)
    return await EventRepository.save(db, event)


async def delete_event(db: AsyncSession, event_id: int) -> None:
    event = await EventRepository.get_by_event_id(db, event_id)
    if not event:
        raise EventNotFoundError(event_id)
    await EventRepository.delete(db, event)
    logger.info(f"Deleted event {event_id}")
