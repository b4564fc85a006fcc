"""
Admin Router

Endpoints:
- POST /admin/seed - Create the first admin (only while none exists)
- GET /admin/exists - Whether an admin account exists
- POST /admin/login - Authenticate and receive JWT tokens
- POST /admin/forgot-password - Issue a password reset token
- POST /admin/reset-password - Reset password with a token
- GET /admin/me - The authenticated admin
- GET /admin/{id} - Get admin (authenticated)
- PUT /admin/update/{id} - Change own e-mail/password (authenticated)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import AdminUser, get_current_admin_user
from app.core.database import get_db
from app.core.exceptions import AuthorizationError
from app.core.rate_limit import enforce_rate_limit
from app.modules.admins import service
from app.modules.admins.schemas import (
    AdminExistsResponse,
    AdminResponse,
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    LoginRequest,
    LoginResponse,
    ResetPasswordRequest,
    SeedAdminRequest,
    UpdateCredentialsRequest,
)
from app.modules.shared import ApiResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()

RATE_LIMIT_LOGIN = (5, 60)
RATE_LIMIT_FORGOT_PASSWORD = (3, 3600)


@router.post(
    "/seed",
    response_model=ApiResponse[AdminResponse],
    status_code=status.HTTP_201_CREATED,
)
async def seed_admin(
    body: SeedAdminRequest | None = None,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[AdminResponse]:
    """Create the first admin; defaults come from settings when omitted."""
    body = body or SeedAdminRequest()
    admin = await service.seed_admin(db, body.email, body.password)
    return ApiResponse[AdminResponse](
        message="Admin seeded successfully", data=AdminResponse.model_validate(admin)
    )


@router.get("/exists", response_model=ApiResponse[AdminExistsResponse])
async def admin_exists(db: AsyncSession = Depends(get_db)) -> ApiResponse[AdminExistsResponse]:
    exists = await service.admin_exists(db)
    return ApiResponse[AdminExistsResponse](
        message="Admin check completed", data=AdminExistsResponse(exists=exists)
    )


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(
    request: Request,
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[LoginResponse]:
    """
    Authenticate an admin and return JWT tokens.

    Raises:
        HTTPException 401: Invalid credentials
        HTTPException 429: Too many attempts
    """
    await enforce_rate_limit(request, "admin:login", *RATE_LIMIT_LOGIN)
    result = await service.login(db, credentials.email, credentials.password)
    return ApiResponse[LoginResponse](message="Login successful", data=result)


@router.post("/forgot-password", response_model=ApiResponse[ForgotPasswordResponse])
async def forgot_password(
    request: Request,
    body: ForgotPasswordRequest,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ForgotPasswordResponse]:
    await enforce_rate_limit(request, "admin:forgot-password", *RATE_LIMIT_FORGOT_PASSWORD)
    token, expires_at = await service.forgot_password(db, body.email)
    return ApiResponse[ForgotPasswordResponse](
        message="Password reset token generated",
        data=ForgotPasswordResponse(reset_token=token, expires_at=expires_at),
    )


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    body: ResetPasswordRequest,
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    await service.reset_password(db, body.token, body.new_password)
    return MessageResponse(message="Password reset successfully")


@router.get("/me", response_model=ApiResponse[AdminResponse])
async def get_me(
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[AdminResponse]:
    record = await service.get_admin(db, admin.id)
    return ApiResponse[AdminResponse](
        message="Admin retrieved successfully", data=AdminResponse.model_validate(record)
    )


@router.get("/{admin_id}", response_model=ApiResponse[AdminResponse])
async def get_admin(
    admin_id: UUID,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[AdminResponse]:
    record = await service.get_admin(db, admin_id)
    return ApiResponse[AdminResponse](
        message="Admin retrieved successfully", data=AdminResponse.model_validate(record)
    )


@router.put("/update/{admin_id}", response_model=ApiResponse[AdminResponse])
async def update_credentials(
    admin_id: UUID,
    body: UpdateCredentialsRequest,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[AdminResponse]:
    """Admins can only change their own credentials."""
    if admin.id != admin_id:
        raise AuthorizationError("You can only update your own credentials.")

    record = await service.update_credentials(
        db,
        admin_id,
        body.current_password,
        new_email=body.new_email,
        new_password=body.new_password,
    )
    return ApiResponse[AdminResponse](
        message="Credentials updated successfully", data=AdminResponse.model_validate(record)
    )
