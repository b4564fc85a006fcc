"""
Tests for the leadership directory service.
"""

from unittest.mock import AsyncMock, patch

import pytest

from app.modules.leaders.models import Leader
from app.modules.leaders.schemas import LeaderCreate, LeaderUpdate
from app.modules.leaders.service import (
    DuplicateLeaderError,
    LeaderNotFoundError,
    add_leader,
    delete_leader,
    update_leader,
)

REPO = "app.modules.leaders.service.LeaderRepository"


@pytest.fixture
def mock_db():
    return AsyncMock()


@pytest.fixture
def leader():
    return Leader(
        leader_id=1,
        name="Dr. Marie Mukamana",
        role="Principal",
        image="/uploads/leaders/marie.jpg",
        linkedin="#",
        email="marie@example.com",
        category="Administration",
        phone="+250788000111",
        profession="Educator",
    )


def _echo(db, value):
    return value


class TestAddLeader:
    @pytest.mark.asyncio
    async def test_defaults_and_lowercased_email(self, mock_db):
        data = LeaderCreate(leader_id=2, name="Eric Nshuti", email="Eric@Example.com")
        with patch(REPO) as mock_repo:
            mock_repo.find_conflict = AsyncMock(return_value=None)
            mock_repo.create = AsyncMock(side_effect=_echo)

            result = await add_leader(mock_db, data)

        assert result.email == "eric@example.com"
        assert result.linkedin == "#"
        mock_repo.find_conflict.assert_awaited_once_with(mock_db, 2, "eric@example.com")

    @pytest.mark.asyncio
    async def test_conflict_on_id_or_email(self, mock_db, leader):
        data = LeaderCreate(leader_id=1, name="Someone", email="other@example.com")
        with patch(REPO) as mock_repo:
            mock_repo.find_conflict = AsyncMock(return_value=leader)
            mock_repo.create = AsyncMock()

            with pytest.raises(DuplicateLeaderError) as exc_info:
                await add_leader(mock_db, data)

        assert exc_info.value.status_code == 409
        mock_repo.create.assert_not_called()


class TestUpdateLeader:
    @pytest.mark.asyncio
    async def test_email_used_by_another_leader(self, mock_db, leader):
        other = Leader(leader_id=5, name="Other", email="taken@example.com")
        with patch(REPO) as mock_repo:
            mock_repo.get_by_leader_id = AsyncMock(return_value=leader)
            mock_repo.get_by_email = AsyncMock(return_value=other)
            mock_repo.save = AsyncMock()

            with pytest.raises(DuplicateLeaderError):
                await update_leader(mock_db, 1, LeaderUpdate(email="taken@example.com"))

        mock_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_partial_update(self, mock_db, leader):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_leader_id = AsyncMock(return_value=leader)
            mock_repo.save = AsyncMock(side_effect=_echo)

            result = await update_leader(mock_db, 1, LeaderUpdate(role="Vice Chancellor"))

        assert result.role == "Vice Chancellor"
        assert result.email == "marie@example.com"


class TestDeleteLeader:
    @pytest.mark.asyncio
    async def test_unknown_leader(self, mock_db):
        with patch(REPO) as mock_repo:
            mock_repo.get_by_leader_id = AsyncMock(return_value=None)
            mock_repo.delete = AsyncMock()

            with pytest.raises(LeaderNotFoundError):
                await delete_leader(mock_db, 42)

        mock_repo.delete.assert_not_called()
