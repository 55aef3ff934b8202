# chatboard/api/routes/rooms.py

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, status

from chatboard.api.deps import get_room_store
from chatboard.api.routes.utils import unwrap
from chatboard.models.models import (
    CreateRoomRequest,
    Message,
    PostMessageRequest,
    Room,
)
from chatboard.services.room_store import RoomStore

router = APIRouter()

# ============================================================================
# ROOM ENDPOINTS
# ============================================================================

@router.get("/rooms", response_model=List[Room])
async def list_rooms(store: RoomStore = Depends(get_room_store)):
    """
    List all rooms with their messages, in creation order.

    Returns:
        List[Room]: Every room in the store
    """
    return store.list_rooms()


@router.post("/rooms", status_code=status.HTTP_201_CREATED)
async def create_room(
    request: Optional[CreateRoomRequest] = Body(default=None),
    store: RoomStore = Depends(get_room_store),
):
    """
    Create a new chatroom.

    Args:
        request: CreateRoomRequest with roomName

    Returns:
        dict: Confirmation message

    Raises:
        HTTPException: 400 if roomName is missing, 409 if it already exists
    """
    request = request or CreateRoomRequest()
    room = unwrap(store.create_room(request.roomName))
    return {"message": f"Room '{room.room_name}' created"}


# ============================================================================
# MESSAGE ENDPOINTS
# ============================================================================

@router.get("/rooms/{room_name}/messages", response_model=List[Message])
async def get_messages(room_name: str, store: RoomStore = Depends(get_room_store)):
    """
    Get every message of a room, oldest first.

    Raises:
        HTTPException: 404 if room not found
    """
    return unwrap(store.get_messages(room_name))


@router.post(
    "/rooms/{room_name}/messages",
    response_model=Message,
    status_code=status.HTTP_201_CREATED,
)
async def post_message(
    room_name: str,
    request: Optional[PostMessageRequest] = Body(default=None),
    store: RoomStore = Depends(get_room_store),
):
    """
    Post a message to a room.

    The timestamp is assigned by the server; any client supplied value
    is ignored. A missing body counts as an empty one, so an unknown
    room is reported before any missing field.

    Args:
        room_name: Name of the target room
        request: PostMessageRequest with username and message

    Returns:
        Message: The stored message

    Raises:
        HTTPException: 404 if room not found, 400 if username or message
        is missing
    """
    request = request or PostMessageRequest()
    return unwrap(store.post_message(room_name, request.username, request.message))
