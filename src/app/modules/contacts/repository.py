"""
Contact Repository

Database operations for contact-form messages.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import asc, delete, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.contacts.models import Contact, ContactStatus

SORTABLE_COLUMNS = {"created_at", "updated_at", "email", "subject", "status", "last_name"}


class ContactRepository:
    """Repository for contact database operations."""

    @staticmethod
    async def create(db: AsyncSession, contact: Contact) -> Contact:
        db.add(contact)
        await db.commit()
        await db.refresh(contact)
        return contact

    @staticmethod
    async def save(db: AsyncSession, contact: Contact) -> Contact:
        await db.commit()
        await db.refresh(contact)
        return contact

    @staticmethod
    async def get_by_id(db: AsyncSession, contact_id: UUID) -> Contact | None:
        return await db.get(Contact, contact_id)

    @staticmethod
    def _filtered(
        status: ContactStatus | None,
        search: str | None,
        start: datetime | None,
        end: datetime | None,
    ):
        query = select(Contact)
        if status:
            query = query.where(Contact.status == status)
        if search:
            pattern = f"%{search}%"
            query = query.where(
                or_(
                    Contact.first_name.ilike(pattern),
                    Contact.last_name.ilike(pattern),
                    Contact.email.ilike(pattern),
                    Contact.subject.ilike(pattern),
                    Contact.message.ilike(pattern),
                )
            )
        if start:
            query = query.where(Contact.created_at >= start)
        if end:
            query = query.where(Contact.created_at < end)
        return query

    @staticmethod
    async def find(
        db: AsyncSession,
        *,
        status: ContactStatus | None = None,
        search: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[Contact], int]:
        """
        Filtered, sorted page of contacts.

        ``end`` is exclusive; callers pass the start of the following day
        to include the whole end date.
        """
        query = ContactRepository._filtered(status, search, start, end)

        total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar() or 0

        if sort_by not in SORTABLE_COLUMNS:
            sort_by = "created_at"
        column = getattr(Contact, sort_by)
        query = query.order_by(asc(column) if sort_order.lower() == "asc" else desc(column))

        result = await db.execute(query.offset(skip).limit(limit))
        return list(result.scalars().all()), total

    @staticmethod
    async def status_counts(db: AsyncSession) -> dict[str, int]:
        result = await db.execute(
            select(Contact.status, func.count(Contact.id)).group_by(Contact.status)
        )
        counts = {status.value: 0 for status in ContactStatus}
        for status, count in result.all():
            counts[status.value if isinstance(status, ContactStatus) else str(status)] = count
        return counts

    @staticmethod
    async def list_for_export(db: AsyncSession, status: ContactStatus | None = None) -> list[Contact]:
        query = select(Contact).order_by(desc(Contact.created_at))
        if status:
            query = query.where(Contact.status == status)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def delete(db: AsyncSession, contact: Contact) -> None:
        await db.delete(contact)
        await db.commit()

    @staticmethod
    async def delete_many(db: AsyncSession, ids: list[UUID]) -> int:
        result = await db.execute(delete(Contact).where(Contact.id.in_(ids)))
        await db.commit()
        return result.rowcount or 0
