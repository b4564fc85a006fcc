"""
Leaders Router

Endpoints:
- POST /leaders/add - Add leader (admin)
- GET /leaders/select - All leaders ordered by id
- GET /leaders/select/{leader_id} - Get leader
- PUT /leaders/update/{leader_id} - Update leader (admin)
- DELETE /leaders/delete/{leader_id} - Delete leader (admin)
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import AdminUser, get_current_admin_user
from app.core.database import get_db
from app.modules.leaders import service
from app.modules.leaders.schemas import LeaderCreate, LeaderResponse, LeaderUpdate
from app.modules.shared import ApiResponse, MessageResponse

router = APIRouter()


@router.post(
    "/add",
    response_model=ApiResponse[LeaderResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_leader(
    body: LeaderCreate,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[LeaderResponse]:
    leader = await service.add_leader(db, body)
    return ApiResponse[LeaderResponse](
        message="Leader added successfully", data=LeaderResponse.model_validate(leader)
    )


@router.get("/select", response_model=ApiResponse[list[LeaderResponse]])
async def list_leaders(db: AsyncSession = Depends(get_db)) -> ApiResponse[list[LeaderResponse]]:
    leaders = await service.list_leaders(db)
    return ApiResponse[list[LeaderResponse]](
        message="Leaders retrieved successfully",
        data=[LeaderResponse.model_validate(leader) for leader in leaders],
    )


@router.get("/select/{leader_id}", response_model=ApiResponse[LeaderResponse])
async def get_leader(
    leader_id: int,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[LeaderResponse]:
    leader = await service.get_leader(db, leader_id)
    return ApiResponse[LeaderResponse](
        message="Leader retrieved successfully", data=LeaderResponse.model_validate(leader)
    )


@router.put("/update/{leader_id}", response_model=ApiResponse[LeaderResponse])
async def update_leader(
    leader_id: int,
    body: LeaderUpdate,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[LeaderResponse]:
    leader = await service.update_leader(db, leader_id, body)
    return ApiResponse[LeaderResponse](
        message="Leader updated successfully", data=LeaderResponse.model_validate(leader)
    )


@router.delete("/delete/{leader_id}", response_model=MessageResponse)
async def delete_leader(
    leader_id: int,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    await service.delete_leader(db, leader_id)
    return MessageResponse(message="Leader deleted successfully")
