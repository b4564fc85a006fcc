"""
Applications Admin Router

Endpoints for portal administrators. Every endpoint requires an admin
bearer token.

Endpoints:
- GET /applications - List applications with filters, search and pagination
- GET /applications/statistics - Counts by status
- GET /applications/status/{status} - Applications in one status
- GET /applications/program/{program} - Applications for one program
- POST /applications/{id}/status - Change status (recorded in history)
- DELETE /applications/{id} - Delete application and its files
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import AdminUser, get_current_admin_user
from app.core.database import get_db
from app.core.storage import LocalFileStorage, get_storage
from app.modules.applications import service
from app.modules.applications.models import ApplicationStatus, ProgramLevel
from app.modules.applications.repository import SORTABLE_COLUMNS
from app.modules.applications.schemas import (
    ApplicationResponse,
    ApplicationStatistics,
    StatusChangeRequest,
)
from app.modules.shared import ApiResponse, MessageResponse, PaginatedResponse, PaginationMeta

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=PaginatedResponse[ApplicationResponse],
    summary="List Applications",
    description=f"""
Paginated list of applications.

**Filters:** `status`, `program`, `level`, `intake_year`.
**Search:** case-insensitive match on first name, last name, e-mail, phone
and application number.
**Sorting:** `sort_by` one of {", ".join(sorted(SORTABLE_COLUMNS))};
`sort_order` asc or desc (default: newest first).
""",
)
async def list_applications(
    status: ApplicationStatus | None = Query(None, description="Filter by status"),
    program: str | None = Query(None, description="Filter by program"),
    level: ProgramLevel | None = Query(None, description="Filter by program level"),
    intake_year: int | None = Query(None, description="Filter by intake year"),
    search: str | None = Query(None, max_length=100, description="Search term"),
    sort_by: str = Query("created_at", description="Sort column"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$", description="Sort direction"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[ApplicationResponse]:
    applications, total = await service.list_applications(
        db,
        status=status,
        program=program,
        level=level,
        intake_year=intake_year,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return PaginatedResponse[ApplicationResponse](
        message="Applications retrieved successfully",
        data=[ApplicationResponse.model_validate(app) for app in applications],
        pagination=PaginationMeta.build(total, page, limit),
    )


@router.get(
    "/statistics",
    response_model=ApiResponse[ApplicationStatistics],
    summary="Application Statistics",
)
async def get_statistics(
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ApplicationStatistics]:
    stats = await service.get_statistics(db)
    return ApiResponse[ApplicationStatistics](
        message="Statistics retrieved successfully", data=stats
    )


@router.get(
    "/status/{status}",
    response_model=ApiResponse[list[ApplicationResponse]],
    summary="List Applications by Status",
)
async def list_by_status(
    status: ApplicationStatus,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[ApplicationResponse]]:
    applications = await service.list_by_status(db, status)
    return ApiResponse[list[ApplicationResponse]](
        message="Applications retrieved successfully",
        data=[ApplicationResponse.model_validate(app) for app in applications],
    )


@router.get(
    "/program/{program}",
    response_model=ApiResponse[list[ApplicationResponse]],
    summary="List Applications by Program",
)
async def list_by_program(
    program: str,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[list[ApplicationResponse]]:
    applications = await service.list_by_program(db, program)
    return ApiResponse[list[ApplicationResponse]](
        message="Applications retrieved successfully",
        data=[ApplicationResponse.model_validate(app) for app in applications],
    )


@router.post(
    "/{application_id}/status",
    response_model=ApiResponse[ApplicationResponse],
    summary="Change Application Status",
    description="""
Move an application to any status. A history entry is appended when the
status changes; moving to `under-review` records the reviewing admin.
Drafts reach `submitted` only through the submit endpoint.
""",
)
async def change_status(
    application_id: UUID,
    request: StatusChangeRequest,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ApplicationResponse]:
    application = await service.change_status(
        db, application_id, request.status, actor=admin, notes=request.notes
    )
    return ApiResponse[ApplicationResponse](
        message="Application status updated successfully",
        data=ApplicationResponse.model_validate(application),
    )


@router.delete(
    "/{application_id}",
    response_model=MessageResponse,
    summary="Delete Application",
)
async def delete_application(
    application_id: UUID,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
    storage: LocalFileStorage = Depends(get_storage),
) -> MessageResponse:
    await service.delete_application(db, storage, application_id)
    logger.info(f"Admin {admin.email} deleted application {application_id}")
    return MessageResponse(message="Application deleted successfully")
