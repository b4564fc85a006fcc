"""
Contact Service Layer

Public contact-form intake and the admin inbox: filtering, status
handling, bulk deletion and CSV export.
"""

import csv
import logging
from datetime import UTC, date, datetime, time, timedelta
from io import StringIO
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, ValidationError
from app.modules.contacts.models import Contact, ContactStatus
from app.modules.contacts.repository import ContactRepository
from app.modules.contacts.schemas import ContactCreate, ContactUpdate

logger = logging.getLogger(__name__)

EXPORT_HEADERS = [
    "First Name",
    "Last Name",
    "Email",
    "Subject",
    "Message",
    "Status",
    "Date",
    "Admin Notes",
]


class ContactNotFoundError(NotFoundError):
    def __init__(self, contact_id: UUID | None = None):
        super().__init__(resource="Contact", identifier=contact_id, error_code="CONTACT_NOT_FOUND")


def day_bounds(start_date: date | None, end_date: date | None) -> tuple[datetime | None, datetime | None]:
    """
    Convert a date range to datetimes.

    The end bound is the start of the day after ``end_date``, so the whole
    end date is included.
    """
    start = datetime.combine(start_date, time.min, tzinfo=UTC) if start_date else None
    end = (
        datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=UTC) if end_date else None
    )
    return start, end


async def submit_contact(
    db: AsyncSession,
    data: ContactCreate,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> Contact:
    contact = Contact(
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
        subject=data.subject,
        message=data.message,
        status=ContactStatus.NEW,
        ip_address=ip_address,
        user_agent=user_agent[:500] if user_agent else None,
    )
    contact = await ContactRepository.create(db, contact)
    logger.info(f"Contact message {contact.id} received")
    return contact


async def list_contacts(
    db: AsyncSession,
    *,
    status: ContactStatus | None = None,
    search: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    page: int = 1,
    limit: int = 10,
) -> tuple[list[Contact], int, dict[str, int]]:
    """Returns (contacts, total matching, counts per status)."""
    start, end = day_bounds(start_date, end_date)
    contacts, total = await ContactRepository.find(
        db,
        status=status,
        search=search.strip() if search else None,
        start=start,
        end=end,
        sort_by=sort_by,
        sort_order=sort_order,
        skip=(page - 1) * limit,
        limit=limit,
    )
    counts = await ContactRepository.status_counts(db)
    return contacts, total, counts


async def get_contact(db: AsyncSession, contact_id: UUID) -> Contact:
    contact = await ContactRepository.get_by_id(db, contact_id)
    if not contact:
        raise ContactNotFoundError(contact_id)
    return contact


async def update_contact(db: AsyncSession, contact_id: UUID, data: ContactUpdate) -> Contact:
    """Change status and/or admin notes."""
    contact = await get_contact(db, contact_id)
    if data.status is not None:
        contact.status = data.status
    if "admin_notes" in data.model_fields_set:
        contact.admin_notes = data.admin_notes
    return await ContactRepository.save(db, contact)


async def mark_as_read(db: AsyncSession, contact_id: UUID) -> Contact:
    return await update_contact(db, contact_id, ContactUpdate(status=ContactStatus.READ))


async def mark_as_replied(db: AsyncSession, contact_id: UUID) -> Contact:
    return await update_contact(db, contact_id, ContactUpdate(status=ContactStatus.REPLIED))


async def delete_contact(db: AsyncSession, contact_id: UUID) -> None:
    contact = await get_contact(db, contact_id)
    await ContactRepository.delete(db, contact)
    logger.info(f"Deleted contact {contact_id}")


async def bulk_delete(db: AsyncSession, ids: list[str]) -> int:
    """
    Delete several contacts. Malformed ids are skipped.

    Raises:
        ValidationError: If none of the ids is valid
    """
    valid_ids: list[UUID] = []
    for raw_id in ids:
        try:
            valid_ids.append(UUID(raw_id))
        except ValueError:
            logger.debug(f"Skipping invalid contact id: {raw_id}")

    if not valid_ids:
        raise ValidationError("No valid contact IDs provided", fields=["ids"])

    deleted = await ContactRepository.delete_many(db, valid_ids)
    logger.info(f"Bulk deleted {deleted} contacts")
    return deleted


def render_csv(contacts: list[Contact]) -> str:
    """Render contacts as CSV with every field quoted."""
    output = StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL)
    writer.writerow(EXPORT_HEADERS)
    for contact in contacts:
        writer.writerow(
            [
                contact.first_name,
                contact.last_name,
                contact.email,
                contact.subject,
                contact.message,
                contact.status.value,
                contact.created_at.date().isoformat() if contact.created_at else "",
                contact.admin_notes or "",
            ]
        )
    return output.getvalue()


async def export_contacts(
    db: AsyncSession, status: ContactStatus | None = None
) -> tuple[str, str]:
    """Returns (filename, csv content)."""
    contacts = await ContactRepository.list_for_export(db, status)
    filename = f"contacts-export-{datetime.now(UTC).date().isoformat()}.csv"
    return filename, render_csv(contacts)
