"""
Gallery Service Layer
"""

import logging
from datetime import UTC, datetime, timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.modules.gallery.models import GalleryItem
from app.modules.gallery.repository import GalleryRepository
from app.modules.gallery.schemas import (
    CategoryCount,
    GalleryCategories,
    GalleryItemCreate,
    GalleryItemUpdate,
    GalleryStats,
)

logger = logging.getLogger(__name__)

RECENT_UPLOAD_WINDOW = timedelta(days=7)


class GalleryItemNotFoundError(NotFoundError):
    def __init__(self, item_id: UUID | None = None):
        super().__init__(resource="Gallery item", identifier=item_id, error_code="GALLERY_ITEM_NOT_FOUND")


def build_item(data: GalleryItemCreate) -> GalleryItem:
    """Alt text falls back to the title when empty."""
    return GalleryItem(
        title=data.title,
        description=data.description,
        category=data.category,
        image_url=data.image_url,
        alt_text=data.alt_text or data.title,
    )


async def list_items(
    db: AsyncSession,
    *,
    category: str | None = None,
    search: str | None = None,
    sort: str = "-created_at",
    page: int = 1,
    limit: int = 20,
) -> tuple[list[GalleryItem], int]:
    if category and category.lower() == "all":
        category = None
    return await GalleryRepository.find(
        db, category=category, search=search, sort=sort, skip=(page - 1) * limit, limit=limit
    )


async def get_item(db: AsyncSession, item_id: UUID) -> GalleryItem:
    item = await GalleryRepository.get_by_id(db, item_id)
    if not item:
        raise GalleryItemNotFoundError(item_id)
    return item


async def get_categories(db: AsyncSession) -> GalleryCategories:
    categories = await GalleryRepository.distinct_categories(db)
    counts = await GalleryRepository.category_counts(db)
    return GalleryCategories(
        categories=categories,
        counts=[CategoryCount(category=c, count=n) for c, n in counts],
    )


async def add_item(db: AsyncSession, data: GalleryItemCreate) -> GalleryItem:
    [item] = await GalleryRepository.create_many(db, [build_item(data)])
    logger.info(f"Added gallery item {item.id}")
    return item


async def bulk_add(db: AsyncSession, items: list[GalleryItemCreate]) -> list[GalleryItem]:
    created = await GalleryRepository.create_many(db, [build_item(data) for data in items])
    logger.info(f"Bulk added {len(created)} gallery items")
    return created


async def update_item(db: AsyncSession, item_id: UUID, data: GalleryItemUpdate) -> GalleryItem:
    item = await get_item(db, item_id)
    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(item, field, value)
    if not item.alt_text:
        item.alt_text = item.title
    return await GalleryRepository.save(db, item)


async def delete_item(db: AsyncSession, item_id: UUID) -> GalleryItem:
    item = await get_item(db, item_id)
    await GalleryRepository.delete(db, item)
    logger.info(f"Deleted gallery item {item_id}")
    return item


async def get_stats(db: AsyncSession, now: datetime | None = None) -> GalleryStats:
    now = now or datetime.now(UTC)
    total = await GalleryRepository.count(db)
    recent = await GalleryRepository.count(db, since=now - RECENT_UPLOAD_WINDOW)
    counts = await GalleryRepository.category_counts(db)
    return GalleryStats(
        total=total,
        recent_uploads=recent,
        by_category=[CategoryCount(category=c, count=n) for c, n in counts],
    )
