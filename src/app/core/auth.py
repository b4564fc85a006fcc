"""
Admin Authentication Dependencies

FastAPI dependencies that validate the bearer token issued by the admin
login endpoint and expose the authenticated admin to route handlers.

SECURITY NOTE:
- Fixed test tokens are accepted ONLY when PYTHON_ENV=development
- Staging and production environments never accept them
"""

import logging
import os
from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import settings
from app.core.security import decode_token

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"

security = HTTPBearer(
    auto_error=True,
    description="JWT Bearer token issued by POST /admin/login",
)


@dataclass
class AdminUser:
    """
    An authenticated portal administrator.

    Populated from JWT claims after token validation.
    """

    id: UUID
    email: str
    role: str

    def __str__(self) -> str:
        return f"AdminUser(id={self.id}, email={self.email})"


def _is_dev_mode_safe() -> bool:
    """True only when both settings and the raw environment say development."""
    env_var = os.getenv("PYTHON_ENV", "development").lower()
    is_safe = settings.is_development and env_var not in ("production", "staging")

    if is_safe:
        logger.warning("Development auth mode is enabled; test tokens are accepted")

    return is_safe


_DEVELOPMENT_MODE = _is_dev_mode_safe()

_DEV_ADMIN = AdminUser(
    id=UUID("00000000-0000-0000-0000-000000000001"),
    email="admin@portal.dev",
    role=ADMIN_ROLE,
)


def _unauthorized(error: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": error, "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


def _validate_jwt_token(token: str) -> AdminUser:
    """
    Validate a bearer token and build the AdminUser from its claims.

    Raises:
        HTTPException 401: If the token is invalid, expired, or not an access token
    """
    if _DEVELOPMENT_MODE and token in ("dev-token", "test-token"):
        logger.debug("Development mode: using test token")
        return _DEV_ADMIN

    payload = decode_token(token)
    if payload is None:
        logger.warning("Invalid or expired JWT token")
        raise _unauthorized("INVALID_TOKEN", "Invalid or expired authentication token.")

    if payload.get("type", "access") != "access":
        logger.warning(f"Invalid token type: {payload.get('type')}")
        raise _unauthorized("INVALID_TOKEN_TYPE", "This endpoint requires an access token.")

    try:
        return AdminUser(
            id=UUID(payload["sub"]),
            email=payload.get("email", ""),
            role=payload.get("role", ""),
        )
    except (ValueError, KeyError) as e:
        logger.warning(f"Invalid token claims: {e}")
        raise _unauthorized(
            "INVALID_TOKEN_CLAIMS", "Token contains invalid or missing claims."
        ) from e


async def get_current_admin_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> AdminUser:
    """
    Require an authenticated administrator.

    Raises:
        HTTPException 401: If the token is missing, invalid, or expired
        HTTPException 403: If the token does not carry the admin role
    """
    user = _validate_jwt_token(credentials.credentials)

    if user.role != ADMIN_ROLE:
        logger.warning(f"Access denied: {user.email} has role '{user.role}'")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error": "ADMIN_ACCESS_REQUIRED",
                "message": "Admin access is required for this endpoint.",
            },
        )

    logger.debug(f"Authenticated admin: {user.id} ({user.email})")
    return user


async def get_optional_admin_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(HTTPBearer(auto_error=False)),
) -> AdminUser | None:
    """
    Return the admin when a valid admin token is supplied, otherwise None.

    Used by endpoints that are public but accept extra fields from admins.
    """
    if not credentials:
        return None

    try:
        return await get_current_admin_user(credentials)
    except HTTPException:
        return None


__all__ = [
    "ADMIN_ROLE",
    "AdminUser",
    "get_current_admin_user",
    "get_optional_admin_user",
]
