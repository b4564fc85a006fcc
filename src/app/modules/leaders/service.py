"""
Leader Service Layer
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError
from app.modules.leaders.models import Leader
from app.modules.leaders.repository import LeaderRepository
from app.modules.leaders.schemas import LeaderCreate, LeaderUpdate

logger = logging.getLogger(__name__)


class LeaderNotFoundError(NotFoundError):
    def __init__(self, leader_id: int | None = None):
        super().__init__(resource="Leader", identifier=leader_id, error_code="LEADER_NOT_FOUND")


class DuplicateLeaderError(ConflictError):
    def __init__(self, message: str = "Leader with this ID or email already exists"):
        super().__init__(message=message, error_code="DUPLICATE_LEADER")


async def add_leader(db: AsyncSession, data: LeaderCreate) -> Leader:
    if await LeaderRepository.find_conflict(db, data.leader_id, data.email):
        raise DuplicateLeaderError()

    leader = await LeaderRepository.create(db, Leader(**data.model_dump()))
    logger.info(f"Added leader {leader.leader_id}")
    return leader


async def list_leaders(db: AsyncSession) -> list[Leader]:
    return await LeaderRepository.list_all(db)


async def get_leader(db: AsyncSession, leader_id: int) -> Leader:
    leader = await LeaderRepository.get_by_leader_id(db, leader_id)
    if not leader:
        raise LeaderNotFoundError(leader_id)
    return leader


async def update_leader(db: AsyncSession, leader_id: int, data: LeaderUpdate) -> Leader:
    leader = await get_leader(db, leader_id)

    if data.email and data.email != leader.email:
        existing = await LeaderRepository.get_by_email(db, data.email)
        if existing and existing.leader_id != leader_id:
            raise DuplicateLeaderError("Email already in use by another leader")

    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(leader, field, value)
    return await LeaderRepository.save(db, leader)


async def delete_leader(db: AsyncSession, leader_id: int) -> None:
    leader = await get_leader(db, leader_id)
    await LeaderRepository.delete(db, leader)
    logger.info(f"Deleted leader {leader_id}")
