"""
Tests for admin service functions.

These tests verify:
- First-admin seeding
- Login and issued tokens
- Password reset token issue and consumption
- Credential updates
"""

import hashlib
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from app.core.security import decode_token, hash_password
from app.modules.admins.models import Admin
from app.modules.admins.service import (
    AdminAlreadyExistsError,
    AdminNotFoundError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    ensure_default_admin,
    forgot_password,
    login,
    reset_password,
    seed_admin,
    update_credentials,
)

REPO = "app.modules.admins.service.AdminRepository"

# ============================================
# Fixtures
# ============================================


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.refresh = AsyncMock()
    return db


@pytest.fixture
def admin():
    now = datetime(2025, 1, 1, tzinfo=UTC)
    return Admin(
        id=uuid4(),
        email="admin@portal.test",
        password_hash=hash_password("secret123"),
        created_at=now,
        updated_at=now,
    )


# ============================================
# Seeding
# ============================================


class TestSeedAdmin:
    """Tests for seed_admin and ensure_default_admin."""

    @pytest.mark.asyncio
    async def test_seed_when_no_admin(self, mock_db, admin):
        with patch(REPO) as mock_repo:
            mock_repo.count = AsyncMock(return_value=0)
            mock_repo.create = AsyncMock(return_value=admin)

            result = await seed_admin(mock_db, "Admin@Portal.test", "secret123")

        assert result is admin
        kwargs = mock_repo.create.call_args.kwargs
        assert kwargs["email"] == "Admin@Portal.test"
        assert kwargs["password_hash"] != "secret123"

    @pytest.mark.asyncio
    async def test_seed_rejected_when_admin_exists(self, mock_db):
        with patch(REPO) as mock_repo:
            mock_repo.count = AsyncMock(return_value=1)
            mock_repo.create = AsyncMock()

            with pytest.raises(AdminAlreadyExistsError) as exc_info:
                await seed_admin(mock_db)

        assert exc_info.value.status_code == 409
        mock_repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_ensure_default_admin_skips_existing(self, mock_db):
        with patch(REPO) as mock_repo:
            mock_repo.count = AsyncMock(return_value=2)
            mock_repo.create = AsyncMock()

            created = await ensure_default_admin(mock_db)

        assert created is False
        mock_repo.create.assert_not_called()


# ============================================
# Login
# ============================================


class TestLogin:
    """Tests for login."""

    @pytest.mark.asyncio
    async def test_login_issues_tokens(self, mock_db, admin):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_email = AsyncMock(return_value=admin)

            result = await login(mock_db, "admin@portal.test", "secret123")

        payload = decode_token(result.access_token)
        assert payload["sub"] == str(admin.id)
        assert payload["role"] == "admin"
        assert result.token_type == "bearer"
        assert result.admin.email == "admin@portal.test"

    @pytest.mark.asyncio
    async def test_wrong_password(self, mock_db, admin):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_email = AsyncMock(return_value=admin)

            with pytest.raises(InvalidCredentialsError) as exc_info:
                await login(mock_db, "admin@portal.test", "wrong")

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_email_same_message(self, mock_db):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_email = AsyncMock(return_value=None)

            with pytest.raises(InvalidCredentialsError) as exc_info:
                await login(mock_db, "nobody@portal.test", "secret123")

        assert exc_info.value.message == "Invalid email or password."


# ============================================
# Password reset
# ============================================


class TestPasswordReset:
    """Tests for forgot_password and reset_password."""

    @pytest.mark.asyncio
    async def test_forgot_password_stores_hash_only(self, mock_db, admin):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_email = AsyncMock(return_value=admin)
            mock_repo.set_reset_token = AsyncMock(return_value=admin)

            token, expires_at = await forgot_password(mock_db, "admin@portal.test")

        _, _, stored_hash, stored_expiry = mock_repo.set_reset_token.call_args.args
        assert stored_hash == hashlib.sha256(token.encode()).hexdigest()
        assert stored_hash != token
        assert stored_expiry == expires_at
        assert expires_at > datetime.now(UTC)

    @pytest.mark.asyncio
    async def test_forgot_password_unknown_email(self, mock_db):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_email = AsyncMock(return_value=None)

            with pytest.raises(AdminNotFoundError):
                await forgot_password(mock_db, "nobody@portal.test")

    @pytest.mark.asyncio
    async def test_reset_consumes_token(self, mock_db, admin):
        admin.reset_token_expires_at = datetime.now(UTC) + timedelta(minutes=10)
        with patch(REPO) as mock_repo:
            mock_repo.get_by_reset_token_hash = AsyncMock(return_value=admin)
            mock_repo.update_credentials = AsyncMock(return_value=admin)

            await reset_password(mock_db, "plain-token", "newsecret")

        mock_repo.get_by_reset_token_hash.assert_awaited_once_with(
            mock_db, hashlib.sha256(b"plain-token").hexdigest()
        )
        assert mock_repo.update_credentials.call_args.kwargs["clear_reset_token"] is True

    @pytest.mark.asyncio
    async def test_expired_token_rejected(self, mock_db, admin):
        admin.reset_token_expires_at = datetime.now(UTC) - timedelta(minutes=1)
        with patch(REPO) as mock_repo:
            mock_repo.get_by_reset_token_hash = AsyncMock(return_value=admin)
            mock_repo.update_credentials = AsyncMock()

            with pytest.raises(InvalidResetTokenError):
                await reset_password(mock_db, "plain-token", "newsecret")

        mock_repo.update_credentials.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_token_rejected(self, mock_db):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_reset_token_hash = AsyncMock(return_value=None)

            with pytest.raises(InvalidResetTokenError):
                await reset_password(mock_db, "nope", "newsecret")


# ============================================
# Credential updates
# ============================================


class TestUpdateCredentials:
    """Tests for update_credentials."""

    @pytest.mark.asyncio
    async def test_wrong_current_password(self, mock_db, admin):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=admin)
            mock_repo.update_credentials = AsyncMock()

            with pytest.raises(InvalidCredentialsError):
                await update_credentials(mock_db, admin.id, "wrong", new_password="another1")

        mock_repo.update_credentials.assert_not_called()

    @pytest.mark.asyncio
    async def test_email_taken_by_other_admin(self, mock_db, admin):
        other = Admin(id=uuid4(), email="other@portal.test", password_hash="x")
        with patch(REPO) as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=admin)
            mock_repo.get_by_email = AsyncMock(return_value=other)

            with pytest.raises(AdminAlreadyExistsError):
                await update_credentials(
                    mock_db, admin.id, "secret123", new_email="other@portal.test"
                )

    @pytest.mark.asyncio
    async def test_new_email_lowercased(self, mock_db, admin):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=admin)
            mock_repo.get_by_email = AsyncMock(return_value=None)
            mock_repo.update_credentials = AsyncMock(return_value=admin)

            await update_credentials(mock_db, admin.id, "secret123", new_email="New@Portal.test")

        kwargs = mock_repo.update_credentials.call_args.kwargs
        assert kwargs["email"] == "new@portal.test"
        assert kwargs["password_hash"] is None

    @pytest.mark.asyncio
    async def test_admin_not_found(self, mock_db):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_id = AsyncMock(return_value=None)

            with pytest.raises(AdminNotFoundError):
                await update_credentials(mock_db, uuid4(), "secret123", new_password="x" * 8)
