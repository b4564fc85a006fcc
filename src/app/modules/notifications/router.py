"""
Notifications Router

Endpoints:
- GET /notifications - List (type filter, timestamp range, pagination)
- GET /notifications/{id} - Get notification
- POST /notifications - Create (admin)
- POST /notifications/seed - Replace all with sample data (admin)
- PUT /notifications/{id} - Partial update (admin)
- DELETE /notifications/{id} - Delete (admin)
- DELETE /notifications - Clear all (admin)
"""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import AdminUser, get_current_admin_user
from app.core.database import get_db
from app.modules.notifications import service
from app.modules.notifications.models import NotificationType
from app.modules.notifications.schemas import (
    ClearedResponse,
    NotificationCreate,
    NotificationResponse,
    NotificationUpdate,
)
from app.modules.shared import ApiResponse, PaginatedResponse, PaginationMeta

router = APIRouter()


@router.get("", response_model=PaginatedResponse[NotificationResponse])
async def list_notifications(
    type: NotificationType | None = Query(None),
    start_date: datetime | None = Query(None),
    end_date: datetime | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[NotificationResponse]:
    notifications, total = await service.list_notifications(
        db, type=type, start=start_date, end=end_date, page=page, limit=limit
    )
    return PaginatedResponse[NotificationResponse](
        message="Notifications retrieved successfully",
        data=[NotificationResponse.model_validate(n) for n in notifications],
        pagination=PaginationMeta.build(total, page, limit),
    )


@router.post(
    "/seed",
    response_model=ApiResponse[list[NotificationResponse]],
    status_code=status.HTTP_201_CREATED,
)
async def seed_notifications(
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[NotificationResponse]]:
    notifications = await service.seed_notifications(db)
    return ApiResponse[list[NotificationResponse]](
        message=f"{len(notifications)} sample notifications seeded",
        data=[NotificationResponse.model_validate(n) for n in notifications],
    )


@router.get("/{notification_id}", response_model=ApiResponse[NotificationResponse])
async def get_notification(
    notification_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[NotificationResponse]:
    notification = await service.get_notification(db, notification_id)
    return ApiResponse[NotificationResponse](
        message="Notification retrieved successfully",
        data=NotificationResponse.model_validate(notification),
    )


@router.post(
    "",
    response_model=ApiResponse[NotificationResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_notification(
    body: NotificationCreate,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[NotificationResponse]:
    notification = await service.create_notification(db, body)
    return ApiResponse[NotificationResponse](
        message="Notification created successfully",
        data=NotificationResponse.model_validate(notification),
    )


@router.put("/{notification_id}", response_model=ApiResponse[NotificationResponse])
async def update_notification(
    notification_id: UUID,
    body: NotificationUpdate,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[NotificationResponse]:
    notification = await service.update_notification(db, notification_id, body)
    return ApiResponse[NotificationResponse](
        message="Notification updated successfully",
        data=NotificationResponse.model_validate(notification),
    )


@router.delete("/{notification_id}", response_model=ApiResponse[dict])
async def delete_notification(
    notification_id: UUID,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[dict]:
    notification = await service.delete_notification(db, notification_id)
    return ApiResponse[dict](
        message="Notification deleted successfully",
        data={"id": str(notification_id), "title": notification.title},
    )


@router.delete("", response_model=ApiResponse[ClearedResponse])
async def clear_notifications(
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ClearedResponse]:
    deleted = await service.clear_notifications(db)
    return ApiResponse[ClearedResponse](
        message="All notifications cleared successfully",
        data=ClearedResponse(deleted_count=deleted),
    )
