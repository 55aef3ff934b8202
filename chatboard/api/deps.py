# chatboard/api/deps.py

from fastapi import Request

from chatboard.services.room_store import RoomStore


def get_room_store(request: Request) -> RoomStore:
    """
    FastAPI dependency returning the application's single RoomStore.

    Shared by the REST routes and the GraphQL context so both transports
    read and write the same rooms.
    """
    return request.app.state.room_store
