# chatboard/api/routes/health.py

from fastapi import APIRouter, Depends

from chatboard.api.deps import get_room_store
from chatboard.services.room_store import RoomStore

router = APIRouter()

@router.get("/health")
async def health(store: RoomStore = Depends(get_room_store)):
    """
    Health check endpoint.

    Returns:
        dict: Status, room count, message count
    """
    return {"status": "healthy", **store.stats()}
