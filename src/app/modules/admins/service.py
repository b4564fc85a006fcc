"""
Admin Service Layer

Credential management for portal administrators:
- First-admin seeding (only while no admin exists)
- Login returning JWT access and refresh tokens
- Password reset with single-use, expiring tokens
- Credential updates guarded by the current password

Security considerations:
- Passwords hashed with bcrypt
- Reset tokens from secrets.token_urlsafe, stored SHA-256 hashed
- Login failures use one message for unknown e-mail and wrong password
- Passwords and tokens are never logged
"""

import hashlib
import logging
import secrets
from datetime import UTC, datetime, timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import ADMIN_ROLE
from app.core.config import settings
from app.core.exceptions import ConflictError, NotFoundError, ServiceError
from app.core.security import (
    create_access_token,
    create_refresh_token,
    hash_password,
    verify_password,
)
from app.modules.admins.models import Admin
from app.modules.admins.repository import AdminRepository
from app.modules.admins.schemas import AdminResponse, LoginResponse

logger = logging.getLogger(__name__)

RESET_TOKEN_LENGTH = 32


def _hash_token(token: str) -> str:
    """SHA-256 hex digest of a reset token."""
    return hashlib.sha256(token.encode()).hexdigest()


class AdminNotFoundError(NotFoundError):
    def __init__(self, identifier: UUID | str | None = None):
        super().__init__(resource="Admin", identifier=identifier, error_code="ADMIN_NOT_FOUND")


class AdminAlreadyExistsError(ConflictError):
    def __init__(self, message: str = "An admin account already exists."):
        super().__init__(message=message, error_code="ADMIN_EXISTS")


class InvalidCredentialsError(ServiceError):
    def __init__(self, message: str = "Invalid email or password."):
        super().__init__(message=message, error_code="INVALID_CREDENTIALS", status_code=401)


class InvalidResetTokenError(ServiceError):
    def __init__(self):
        super().__init__(
            message="Invalid or expired password reset token.",
            error_code="INVALID_RESET_TOKEN",
            status_code=400,
        )


async def seed_admin(
    db: AsyncSession,
    email: str | None = None,
    password: str | None = None,
) -> Admin:
    """
    Create the first admin account.

    Raises:
        AdminAlreadyExistsError: If any admin already exists
    """
    if await AdminRepository.count(db) > 0:
        raise AdminAlreadyExistsError(
            "An admin account already exists. Use the update endpoint to change credentials."
        )

    return await AdminRepository.create(
        db,
        email=email or settings.default_admin_email,
        password_hash=hash_password(password or settings.default_admin_password),
    )


async def ensure_default_admin(db: AsyncSession) -> bool:
    """Seed the default admin on startup. Returns True if one was created."""
    if await AdminRepository.count(db) > 0:
        return False
    await seed_admin(db)
    return True


async def admin_exists(db: AsyncSession) -> bool:
    return await AdminRepository.count(db) > 0


async def login(db: AsyncSession, email: str, password: str) -> LoginResponse:
    """
    Authenticate an admin.

    Raises:
        InvalidCredentialsError: For an unknown e-mail or a wrong password
    """
    admin = await AdminRepository.get_by_email(db, email)

    if not admin:
        logger.warning(f"Login attempt for non-existent admin: {email}")
        raise InvalidCredentialsError()

    if not verify_password(password, admin.password_hash):
        logger.warning(f"Invalid password for admin: {email}")
        raise InvalidCredentialsError()

    access_token = create_access_token(
        subject=str(admin.id),
        additional_claims={"email": admin.email, "role": ADMIN_ROLE},
    )
    refresh_token = create_refresh_token(subject=str(admin.id))

    logger.info(f"Admin logged in: {admin.email}")
    return LoginResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        admin=AdminResponse.model_validate(admin),
    )


async def forgot_password(db: AsyncSession, email: str) -> tuple[str, datetime]:
    """
    Issue a password reset token.

    There is no outbound e-mail, so the plain token is returned to the
    caller; only its hash is stored.

    Returns:
        Tuple of (plain token, expiry)

    Raises:
        AdminNotFoundError: If no admin has this e-mail
    """
    admin = await AdminRepository.get_by_email(db, email)
    if not admin:
        raise AdminNotFoundError(email)

    token = secrets.token_urlsafe(RESET_TOKEN_LENGTH)
    expires_at = datetime.now(UTC) + timedelta(minutes=settings.password_reset_expire_minutes)
    await AdminRepository.set_reset_token(db, admin, _hash_token(token), expires_at)

    logger.info(f"Password reset requested for admin {admin.id}")
    return token, expires_at


async def reset_password(db: AsyncSession, token: str, new_password: str) -> None:
    """
    Set a new password using a reset token. The token is consumed.

    Raises:
        InvalidResetTokenError: If the token is unknown or expired
    """
    admin = await AdminRepository.get_by_reset_token_hash(db, _hash_token(token))

    if not admin or not admin.reset_token_expires_at:
        logger.warning("Password reset failed: token not found")
        raise InvalidResetTokenError()

    if datetime.now(UTC) > admin.reset_token_expires_at:
        logger.warning(f"Password reset failed: token expired for admin {admin.id}")
        raise InvalidResetTokenError()

    await AdminRepository.update_credentials(
        db, admin, password_hash=hash_password(new_password), clear_reset_token=True
    )
    logger.info(f"Password reset completed for admin {admin.id}")


async def get_admin(db: AsyncSession, admin_id: UUID) -> Admin:
    admin = await AdminRepository.get_by_id(db, admin_id)
    if not admin:
        raise AdminNotFoundError(admin_id)
    return admin


async def update_credentials(
    db: AsyncSession,
    admin_id: UUID,
    current_password: str,
    new_email: str | None = None,
    new_password: str | None = None,
) -> Admin:
    """
    Change an admin's e-mail and/or password.

    Raises:
        AdminNotFoundError: If the admin does not exist
        InvalidCredentialsError: If the current password is wrong
        AdminAlreadyExistsError: If the new e-mail belongs to another admin
    """
    admin = await get_admin(db, admin_id)

    if not verify_password(current_password, admin.password_hash):
        logger.warning(f"Credential update rejected for admin {admin_id}: wrong password")
        raise InvalidCredentialsError("Current password is incorrect.")

    email = None
    if new_email and new_email.lower() != admin.email:
        other = await AdminRepository.get_by_email(db, new_email)
        if other and other.id != admin.id:
            raise AdminAlreadyExistsError("Another admin already uses this email.")
        email = new_email.lower()

    admin = await AdminRepository.update_credentials(
        db,
        admin,
        email=email,
        password_hash=hash_password(new_password) if new_password else None,
    )
    logger.info(f"Credentials updated for admin {admin.id}")
    return admin
