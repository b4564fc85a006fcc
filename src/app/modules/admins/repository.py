"""
Admin Repository

Database operations for admin accounts.
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.admins.models import Admin

logger = logging.getLogger(__name__)


class AdminRepository:
    """Repository for admin database operations."""

    @staticmethod
    async def create(db: AsyncSession, *, email: str, password_hash: str) -> Admin:
        admin = Admin(email=email.lower(), password_hash=password_hash)
        db.add(admin)
        await db.commit()
        await db.refresh(admin)
        logger.info(f"Created admin: {admin.email}")
        return admin

    @staticmethod
    async def get_by_id(db: AsyncSession, admin_id: UUID) -> Admin | None:
        return await db.get(Admin, admin_id)

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Admin | None:
        """Get admin by e-mail (case-insensitive)."""
        result = await db.execute(select(Admin).where(Admin.email == email.lower()))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_reset_token_hash(db: AsyncSession, token_hash: str) -> Admin | None:
        result = await db.execute(select(Admin).where(Admin.reset_token_hash == token_hash))
        return result.scalar_one_or_none()

    @staticmethod
    async def count(db: AsyncSession) -> int:
        result = await db.execute(select(func.count()).select_from(Admin))
        return result.scalar() or 0

    @staticmethod
    async def set_reset_token(
        db: AsyncSession, admin: Admin, token_hash: str, expires_at: datetime
    ) -> Admin:
        admin.reset_token_hash = token_hash
        admin.reset_token_expires_at = expires_at
        await db.commit()
        await db.refresh(admin)
        return admin

    @staticmethod
    async def update_credentials(
        db: AsyncSession,
        admin: Admin,
        *,
        email: str | None = None,
        password_hash: str | None = None,
        clear_reset_token: bool = False,
    ) -> Admin:
        if email is not None:
            admin.email = email.lower()
        if password_hash is not None:
            admin.password_hash = password_hash
        if clear_reset_token:
            admin.reset_token_hash = None
            admin.reset_token_expires_at = None
        await db.commit()
        await db.refresh(admin)
        return admin
