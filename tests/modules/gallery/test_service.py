"""
Tests for the gallery service.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from app.core.config import settings
from app.modules.gallery.models import GalleryItem
from app.modules.gallery.schemas import GalleryItemCreate, GalleryItemResponse, GalleryItemUpdate
from app.modules.gallery.service import (
    RECENT_UPLOAD_WINDOW,
    GalleryItemNotFoundError,
    build_item,
    bulk_add,
    get_stats,
    list_items,
    update_item,
)

REPO = "app.modules.gallery.service.GalleryRepository"


@pytest.fixture
def mock_db():
    return AsyncMock()


@pytest.fixture
def item():
    now = datetime(2025, 2, 1, tzinfo=UTC)
    return GalleryItem(
        id=uuid4(),
        title="Graduation 2024",
        description="",
        category="Events",
        image_url="/uploads/gallery/graduation.jpg",
        alt_text="Graduates on stage",
        created_at=now,
        updated_at=now,
    )


def _echo(db, value):
    return value


class TestBuildItem:
    def test_alt_text_defaults_to_title(self):
        result = build_item(GalleryItemCreate(title="  Library ", image_url="/uploads/a.jpg"))

        assert result.title == "Library"
        assert result.alt_text == "Library"
        assert result.category == "General"

    def test_explicit_alt_text_kept(self):
        result = build_item(
            GalleryItemCreate(title="Library", image_url="/uploads/a.jpg", alt_text="Reading room")
        )

        assert result.alt_text == "Reading room"


class TestResponse:
    def test_full_image_url_uses_base_url(self, item):
        response = GalleryItemResponse.model_validate(item)

        assert response.full_image_url == f"{settings.base_url}/uploads/gallery/graduation.jpg"
        assert "full_image_url" in response.model_dump()


class TestListItems:
    @pytest.mark.asyncio
    async def test_all_category_means_no_filter(self, mock_db):
        with patch(REPO) as mock_repo:
            mock_repo.find = AsyncMock(return_value=([], 0))

            await list_items(mock_db, category="All", page=2, limit=20)

        kwargs = mock_repo.find.call_args.kwargs
        assert kwargs["category"] is None
        assert kwargs["skip"] == 20


class TestWrites:
    @pytest.mark.asyncio
    async def test_bulk_add_builds_every_item(self, mock_db):
        payload = [
            GalleryItemCreate(title=f"Photo {i}", image_url=f"/uploads/{i}.jpg") for i in range(3)
        ]
        with patch(REPO) as mock_repo:
            mock_repo.create_many = AsyncMock(side_effect=_echo)

            created = await bulk_add(mock_db, payload)

        assert [c.alt_text for c in created] == ["Photo 0", "Photo 1", "Photo 2"]

    @pytest.mark.asyncio
    async def test_clearing_alt_text_falls_back_to_title(self, mock_db, item):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=item)
            mock_repo.save = AsyncMock(side_effect=_echo)

            result = await update_item(mock_db, item.id, GalleryItemUpdate(alt_text=""))

        assert result.alt_text == "Graduation 2024"

    @pytest.mark.asyncio
    async def test_update_missing_item(self, mock_db):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=None)

            with pytest.raises(GalleryItemNotFoundError):
                await update_item(mock_db, uuid4(), GalleryItemUpdate(title="x"))


class TestStats:
    @pytest.mark.asyncio
    async def test_recent_window_is_seven_days(self, mock_db):
        now = datetime(2025, 3, 10, tzinfo=UTC)
        with patch(REPO) as mock_repo:
            mock_repo.count = AsyncMock(side_effect=[12, 4])
            mock_repo.category_counts = AsyncMock(return_value=[("Events", 8), ("Campus", 4)])

            stats = await get_stats(mock_db, now=now)

        assert stats.total == 12
        assert stats.recent_uploads == 4
        assert stats.by_category[0].category == "Events"
        assert mock_repo.count.call_args_list[1].kwargs["since"] == now - RECENT_UPLOAD_WINDOW
