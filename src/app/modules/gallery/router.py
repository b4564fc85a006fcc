"""
Gallery Router

Endpoints:
- GET /gallery/all - List items (category, search, sort, pagination)
- GET /gallery/item/{id} - Get item
- GET /gallery/categories - Distinct categories with counts
- POST /gallery/add - Add item (admin)
- PUT /gallery/update/{id} - Update item (admin)
- DELETE /gallery/delete/{id} - Delete item (admin)
- GET /gallery/stats/overview - Statistics (admin)
- POST /gallery/bulk-upload - Add up to 100 items (admin)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import AdminUser, get_current_admin_user
from app.core.database import get_db
from app.modules.gallery import service
from app.modules.gallery.schemas import (
    BulkGalleryRequest,
    GalleryCategories,
    GalleryItemCreate,
    GalleryItemResponse,
    GalleryItemUpdate,
    GalleryStats,
)
from app.modules.shared import ApiResponse, PaginatedResponse, PaginationMeta

router = APIRouter()


@router.get("/all", response_model=PaginatedResponse[GalleryItemResponse])
async def list_items(
    category: str | None = Query(None),
    search: str | None = Query(None, max_length=100),
    sort_by: str = Query("-created_at", description="Column, prefix '-' for descending"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[GalleryItemResponse]:
    items, total = await service.list_items(
        db, category=category, search=search, sort=sort_by, page=page, limit=limit
    )
    return PaginatedResponse[GalleryItemResponse](
        message="Gallery items retrieved successfully",
        data=[GalleryItemResponse.model_validate(i) for i in items],
        pagination=PaginationMeta.build(total, page, limit),
    )


@router.get("/item/{item_id}", response_model=ApiResponse[GalleryItemResponse])
async def get_item(
    item_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[GalleryItemResponse]:
    item = await service.get_item(db, item_id)
    return ApiResponse[GalleryItemResponse](
        message="Gallery item retrieved successfully",
        data=GalleryItemResponse.model_validate(item),
    )


@router.get("/categories", response_model=ApiResponse[GalleryCategories])
async def get_categories(db: AsyncSession = Depends(get_db)) -> ApiResponse[GalleryCategories]:
    return ApiResponse[GalleryCategories](
        message="Categories retrieved successfully", data=await service.get_categories(db)
    )


@router.post(
    "/add",
    response_model=ApiResponse[GalleryItemResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_item(
    body: GalleryItemCreate,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[GalleryItemResponse]:
    item = await service.add_item(db, body)
    return ApiResponse[GalleryItemResponse](
        message="Gallery item added successfully",
        data=GalleryItemResponse.model_validate(item),
    )


@router.put("/update/{item_id}", response_model=ApiResponse[GalleryItemResponse])
async def update_item(
    item_id: UUID,
    body: GalleryItemUpdate,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[GalleryItemResponse]:
    item = await service.update_item(db, item_id, body)
    return ApiResponse[GalleryItemResponse](
        message="Gallery item updated successfully",
        data=GalleryItemResponse.model_validate(item),
    )


@router.delete("/delete/{item_id}", response_model=ApiResponse[dict])
async def delete_item(
    item_id: UUID,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[dict]:
    item = await service.delete_item(db, item_id)
    return ApiResponse[dict](
        message="Gallery item deleted successfully",
        data={"id": str(item_id), "title": item.title},
    )


@router.get("/stats/overview", response_model=ApiResponse[GalleryStats])
async def get_stats(
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[GalleryStats]:
    return ApiResponse[GalleryStats](
        message="Statistics retrieved successfully", data=await service.get_stats(db)
    )


@router.post(
    "/bulk-upload",
    response_model=ApiResponse[list[GalleryItemResponse]],
    status_code=status.HTTP_201_CREATED,
)
async def bulk_upload(
    body: BulkGalleryRequest,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[GalleryItemResponse]]:
    items = await service.bulk_add(db, body.items)
    return ApiResponse[list[GalleryItemResponse]](
        message=f"{len(items)} gallery items uploaded successfully",
        data=[GalleryItemResponse.model_validate(i) for i in items],
    )
