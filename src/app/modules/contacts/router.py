"""
Contacts Router

Endpoints:
- POST /contacts/submit - Submit the contact form (public, rate limited)
- GET /contacts - List messages with filters (admin)
- GET /contacts/export - Download messages as CSV (admin)
- GET /contacts/{id} - Get message (admin)
- PATCH /contacts/{id} - Update status / admin notes (admin)
- PATCH /contacts/{id}/read - Mark as read (admin)
- PATCH /contacts/{id}/replied - Mark as replied (admin)
- DELETE /contacts/{id} - Delete message (admin)
- POST /contacts/bulk-delete - Delete several messages (admin)
"""

import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import AdminUser, get_current_admin_user
from app.core.database import get_db
from app.core.rate_limit import client_ip, enforce_rate_limit
from app.modules.contacts import service
from app.modules.contacts.models import ContactStatus
from app.modules.contacts.schemas import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    ContactCreate,
    ContactListResponse,
    ContactResponse,
    ContactUpdate,
)
from app.modules.shared import ApiResponse, MessageResponse, PaginationMeta

logger = logging.getLogger(__name__)

router = APIRouter()

RATE_LIMIT_SUBMIT = (5, 600)  # 5 messages per 10 minutes per IP


@router.post(
    "/submit",
    response_model=ApiResponse[ContactResponse],
    status_code=status.HTTP_201_CREATED,
)
async def submit_contact(
    request: Request,
    body: ContactCreate,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ContactResponse]:
    await enforce_rate_limit(request, "contacts:submit", *RATE_LIMIT_SUBMIT)
    contact = await service.submit_contact(
        db, body, ip_address=client_ip(request), user_agent=request.headers.get("user-agent")
    )
    return ApiResponse[ContactResponse](
        message="Thank you for contacting us. We will get back to you soon.",
        data=ContactResponse.model_validate(contact),
    )


@router.get("", response_model=ContactListResponse)
async def list_contacts(
    status: ContactStatus | None = Query(None),
    search: str | None = Query(None, max_length=100),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    sort_by: str = Query("created_at"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ContactListResponse:
    contacts, total, counts = await service.list_contacts(
        db,
        status=status,
        search=search,
        start_date=start_date,
        end_date=end_date,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return ContactListResponse(
        data=[ContactResponse.model_validate(c) for c in contacts],
        pagination=PaginationMeta.build(total, page, limit).model_dump(),
        status_counts=counts,
    )


@router.get("/export")
async def export_contacts(
    status: ContactStatus | None = Query(None),
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> StreamingResponse:
    filename, content = await service.export_contacts(db, status)
    logger.info(f"Admin {admin.email} exported contacts ({filename})")
    return StreamingResponse(
        iter([content]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.post("/bulk-delete", response_model=ApiResponse[BulkDeleteResponse])
async def bulk_delete(
    body: BulkDeleteRequest,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[BulkDeleteResponse]:
    deleted = await service.bulk_delete(db, body.ids)
    return ApiResponse[BulkDeleteResponse](
        message=f"{deleted} contact(s) deleted successfully",
        data=BulkDeleteResponse(deleted_count=deleted),
    )


@router.get("/{contact_id}", response_model=ApiResponse[ContactResponse])
async def get_contact(
    contact_id: UUID,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ContactResponse]:
    contact = await service.get_contact(db, contact_id)
    return ApiResponse[ContactResponse](
        message="Contact retrieved successfully", data=ContactResponse.model_validate(contact)
    )


@router.patch("/{contact_id}", response_model=ApiResponse[ContactResponse])
async def update_contact(
    contact_id: UUID,
    body: ContactUpdate,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ContactResponse]:
    contact = await service.update_contact(db, contact_id, body)
    return ApiResponse[ContactResponse](
        message="Contact updated successfully", data=ContactResponse.model_validate(contact)
    )


@router.patch("/{contact_id}/read", response_model=ApiResponse[ContactResponse])
async def mark_as_read(
    contact_id: UUID,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ContactResponse]:
    contact = await service.mark_as_read(db, contact_id)
    return ApiResponse[ContactResponse](
        message="Contact marked as read", data=ContactResponse.model_validate(contact)
    )


@router.patch("/{contact_id}/replied", response_model=ApiResponse[ContactResponse])
async def mark_as_replied(
    contact_id: UUID,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ContactResponse]:
    contact = await service.mark_as_replied(db, contact_id)
    return ApiResponse[ContactResponse](
        message="Contact marked as replied", data=ContactResponse.model_validate(contact)
    )


@router.delete("/{contact_id}", response_model=MessageResponse)
async def delete_contact(
    contact_id: UUID,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    await service.delete_contact(db, contact_id)
    return MessageResponse(message="Contact deleted successfully")
