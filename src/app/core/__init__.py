"""
Core module - settings, persistence, admin authentication and the shared
error hierarchy used by every feature module.
"""

from app.core.auth import ADMIN_ROLE, AdminUser, get_current_admin_user, get_optional_admin_user
from app.core.config import get_settings, settings
from app.core.database import Base, async_session_maker, close_db, get_db, init_db
from app.core.exceptions import (
    AuthorizationError,
    ConflictError,
    InternalError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from app.core.storage import LocalFileStorage, StoredFile, get_storage

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "async_session_maker",
    "get_db",
    "init_db",
    "close_db",
    # Admin authentication
    "ADMIN_ROLE",
    "AdminUser",
    "get_current_admin_user",
    "get_optional_admin_user",
    # Errors
    "ServiceError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "AuthorizationError",
    "InternalError",
    # Uploads
    "LocalFileStorage",
    "StoredFile",
    "get_storage",
]
