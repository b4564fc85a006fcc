"""
Document Library Repository
"""

from uuid import UUID

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.documents.models import DocumentCategory, LibraryDocument


class DocumentRepository:
    """Repository for library document database operations."""

    @staticmethod
    async def create(db: AsyncSession, document: LibraryDocument) -> LibraryDocument:
        db.add(document)
        await db.commit()
        await db.refresh(document)
        return document

    @staticmethod
    async def save(db: AsyncSession, document: LibraryDocument) -> LibraryDocument:
        await db.commit()
        await db.refresh(document)
        return document

    @staticmethod
    async def delete(db: AsyncSession, document: LibraryDocument) -> None:
        await db.delete(document)
        await db.commit()

    @staticmethod
    async def get_by_id(db: AsyncSession, document_id: UUID) -> LibraryDocument | None:
        return await db.get(LibraryDocument, document_id)

    @staticmethod
    async def get_by_name(
        db: AsyncSession, name: str, exclude_id: UUID | None = None
    ) -> LibraryDocument | None:
        query = select(LibraryDocument).where(LibraryDocument.name == name)
        if exclude_id:
            query = query.where(LibraryDocument.id != exclude_id)
        result = await db.execute(query.limit(1))
        return result.scalar_one_or_none()

    @staticmethod
    async def search(
        db: AsyncSession,
        *,
        name: str | None = None,
        description: str | None = None,
        category: DocumentCategory | None = None,
        limit: int | None = None,
    ) -> list[LibraryDocument]:
        """Newest upload first. Name and description match case-insensitive substrings."""
        query = select(LibraryDocument)
        if name:
            query = query.where(LibraryDocument.name.ilike(f"%{name}%"))
        if description:
            query = query.where(LibraryDocument.description.ilike(f"%{description}%"))
        if category:
            query = query.where(LibraryDocument.category == category)
        query = query.order_by(desc(LibraryDocument.upload_date))
        if limit:
            query = query.limit(limit)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def count(db: AsyncSession) -> int:
        result = await db.execute(select(func.count()).select_from(LibraryDocument))
        return result.scalar() or 0

    @staticmethod
    async def category_summary(db: AsyncSession) -> list[tuple]:
        """Rows of (category, count, latest upload_date) ordered by category."""
        result = await db.execute(
            select(
                LibraryDocument.category,
                func.count(LibraryDocument.id),
                func.max(LibraryDocument.upload_date),
            )
            .group_by(LibraryDocument.category)
            .order_by(LibraryDocument.category)
        )
        return list(result.all())

    @staticmethod
    async def count_by(db: AsyncSession, column) -> dict[str, int]:
        """Counts grouped by ``column``, largest first."""
        count = func.count(LibraryDocument.id)
        result = await db.execute(select(column, count).group_by(column).order_by(desc(count)))
        return {key.value if hasattr(key, "value") else str(key): n for key, n in result.all()}
