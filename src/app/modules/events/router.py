"""
Events Router

Endpoints:
- GET /events - Active events ordered by date
- GET /events/{event_id} - Get active event
- POST /events - Create event (admin)
- PUT /events/{event_id} - Update event (admin)
- DELETE /events/{event_id} - Delete event (admin)
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import AdminUser, get_current_admin_user
from app.core.database import get_db
from app.modules.events import service
from app.modules.events.schemas import EventCreate, EventResponse, EventUpdate
from app.modules.shared import ApiResponse, MessageResponse

router = APIRouter()


@router.get("", response_model=ApiResponse[list[EventResponse]])
async def list_events(db: AsyncSession = Depends(get_db)) -> ApiResponse[list[EventResponse]]:
    events = await service.list_events(db)
    return ApiResponse[list[EventResponse]](
        message="Events retrieved successfully" if events else "No events found",
        data=[EventResponse.model_validate(e) for e in events],
    )


@router.get("/{event_id}", response_model=ApiResponse[EventResponse])
async def get_event(
    event_id: int,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[EventResponse]:
    event = await service.get_event(db, event_id)
    return ApiResponse[EventResponse](
        message="Event retrieved successfully", data=EventResponse.model_validate(event)
    )


@router.post(
    "",
    response_model=ApiResponse[EventResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_event(
    body: EventCreate,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[EventResponse]:
    event = await service.create_event(db, body)
    return ApiResponse[EventResponse](
        message="Event created successfully", data=EventResponse.model_validate(event)
    )


@router.put("/{event_id}", response_model=ApiResponse[EventResponse])
async def update_event(
    event_id: int,
    body: EventUpdate,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[EventResponse]:
    event = await service.update_event(db, event_id, body)
    return ApiResponse[EventResponse](
        message="Event updated successfully", data=EventResponse.model_validate(event)
    )


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event(
    event_id: int,
    admin: AdminUser = Depends(get_current_admin_user),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    await service.delete_event(db, event_id)
    return MessageResponse(message="Event deleted successfully")
