"""
Gallery Repository
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import asc, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.gallery.models import GalleryItem

SORTABLE_COLUMNS = {"created_at", "updated_at", "title", "category"}


class GalleryRepository:
    """Repository for gallery database operations."""

    @staticmethod
    async def create_many(db: AsyncSession, items: list[GalleryItem]) -> list[GalleryItem]:
        db.add_all(items)
        await db.commit()
        for item in items:
            await db.refresh(item)
        return items

    @staticmethod
    async def save(db: AsyncSession, item: GalleryItem) -> GalleryItem:
        await db.commit()
        await db.refresh(item)
        return item

    @staticmethod
    async def delete(db: AsyncSession, item: GalleryItem) -> None:
        await db.delete(item)
        await db.commit()

    @staticmethod
    async def get_by_id(db: AsyncSession, item_id: UUID) -> GalleryItem | None:
        return await db.get(GalleryItem, item_id)

    @staticmethod
    async def find(
        db: AsyncSession,
        *,
        category: str | None = None,
        search: str | None = None,
        sort: str = "-created_at",
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[GalleryItem], int]:
        """
        Filtered page of gallery items.

        ``sort`` is a column name, prefixed with ``-`` for descending order.
        Unknown columns fall back to newest first.
        """
        query = select(GalleryItem)
        if category:
            query = query.where(GalleryItem.category == category)
        if search:
            pattern = f"%{search}%"
            query = query.where(
                or_(GalleryItem.title.ilike(pattern), GalleryItem.description.ilike(pattern))
            )

        total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar() or 0

        descending = sort.startswith("-")
        column_name = sort.lstrip("-")
        if column_name not in SORTABLE_COLUMNS:
            column_name, descending = "created_at", True
        column = getattr(GalleryItem, column_name)
        query = query.order_by(desc(column) if descending else asc(column))

        result = await db.execute(query.offset(skip).limit(limit))
        return list(result.scalars().all()), total

    @staticmethod
    async def distinct_categories(db: AsyncSession) -> list[str]:
        result = await db.execute(
            select(GalleryItem.category).distinct().order_by(GalleryItem.category)
        )
        return list(result.scalars().all())

    @staticmethod
    async def category_counts(db: AsyncSession) -> list[tuple[str, int]]:
        """(category, count) pairs, largest first."""
        count = func.count(GalleryItem.id)
        result = await db.execute(
            select(GalleryItem.category, count).group_by(GalleryItem.category).order_by(desc(count))
        )
        return [(category, n) for category, n in result.all()]

    @staticmethod
    async def count(db: AsyncSession, since: datetime | None = None) -> int:
        query = select(func.count()).select_from(GalleryItem)
        if since:
            query = query.where(GalleryItem.created_at >= since)
        result = await db.execute(query)
        return result.scalar() or 0
