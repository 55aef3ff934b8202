# chatboard/api/routes/root.py

from fastapi import APIRouter

from chatboard.core.config import settings

router = APIRouter()


@router.get("/")
async def root():
    """
    Root endpoint - API information.

    Returns basic info about the API and where each transport lives.
    """
    return {
        "message": "Chatboard - rooms and messages over REST and GraphQL",
        "version": "1.0",
        "endpoints": {
            "rooms": f"{settings.API_PREFIX}/rooms",
            "messages": f"{settings.API_PREFIX}/rooms/{{roomName}}/messages",
            "graphql": settings.GRAPHQL_PATH,
            "health": "/health",
        },
    }
