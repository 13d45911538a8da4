"""Room endpoints for API v1.

Rooms are public to browse.  Creating a room requires owning its
hotel; changing one requires owning the room.  Pictures are added with
a multipart upload.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from booking_platform_api.app.core.errors import http_error
from booking_platform_api.app.core.security import ADMIN, PROVIDER, require_roles
from booking_platform_api.app.schemas.room import RoomCreate, RoomRead, RoomUpdate
from booking_platform_api.app.services.room_service import RoomService


router = APIRouter()


@router.get("/", response_model=List[RoomRead])
async def list_rooms(
    hotel_id: Optional[int] = Query(None),
    active: Optional[bool] = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[RoomRead]:
    return await RoomService.list_rooms(hotel_id=hotel_id, active=active, limit=limit, offset=offset)


@router.post("/", response_model=RoomRead, status_code=status.HTTP_201_CREATED)
async def create_room(
    room: RoomCreate,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> RoomRead:
    try:
        return await RoomService.create_room(room, current_user)
    except ValueError as e:
        raise http_error(e)


@router.get("/{room_id}", response_model=RoomRead)
async def get_room(room_id: int) -> RoomRead:
    try:
        return await RoomService.get_room(room_id)
    except ValueError as e:
        raise http_error(e)


@router.put("/{room_id}", response_model=RoomRead)
async def update_room(
    room_id: int,
    room: RoomUpdate,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> RoomRead:
    try:
        return await RoomService.update_room(room_id, room, current_user)
    except ValueError as e:
        raise http_error(e)


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_room(
    room_id: int,
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> None:
    try:
        await RoomService.delete_room(room_id, current_user)
    except ValueError as e:
        raise http_error(e)
    return None


@router.post("/{room_id}/pictures", response_model=RoomRead)
async def upload_room_pictures(
    room_id: int,
    files: List[UploadFile] = File(...),
    current_user: dict = Depends(require_roles(ADMIN, PROVIDER)),
) -> RoomRead:
    try:
        return await RoomService.add_pictures(room_id, files, current_user)
    except ValueError as e:
        raise http_error(e)
