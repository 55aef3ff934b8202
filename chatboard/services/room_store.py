# chatboard/services/room_store.py

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List
import logging
import threading

from chatboard.models.models import (
    CreateRoomInput,
    Message,
    PostMessageInput,
    Room,
)
from chatboard.models.results import ErrorKind, Failure, Ok, Result

logger = logging.getLogger(__name__)

ROOM_NOT_FOUND = "Room not found"
ROOM_ALREADY_EXISTS = "Room already exists"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Render an instant as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ============================================================================
# IN-MEMORY ROOM STORE
# ============================================================================

class RoomStore:
    """
    Owns every room and message for the lifetime of the process.

    Both the REST routes and the GraphQL resolvers call into one instance
    of this class, so they always see the same rooms. Nothing is written
    to disk: the store starts empty and is discarded with the process.

    Attributes:
        _rooms: Dictionary mapping room name -> list of Message, in the
                order the rooms were created

    Failures are returned, not raised. Every operation that can fail
    returns either ``Ok(value)`` or ``Failure(kind, message)`` and the
    caller decides how to report it.

    Usage:
        store = RoomStore()
        store.create_room("general")
        store.post_message("general", "alice", "hi")
        messages = store.get_messages("general").value
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._rooms: Dict[str, List[Message]] = {}
        self._clock = clock
        # Serializes check-then-insert and appends when handlers run in threads
        self._lock = threading.RLock()

    def list_rooms(self) -> List[Room]:
        """
        Get all rooms with their messages.

        Returns:
            List of Room snapshots in creation order
        """
        with self._lock:
            return [
                Room(room_name=name, messages=list(messages))
                for name, messages in self._rooms.items()
            ]

    def get_messages(self, room_name: str) -> Result[List[Message]]:
        """
        Get the messages of a room, oldest first.

        Args:
            room_name: Name of the room

        Returns:
            Ok with the messages, or Failure(ROOM_NOT_FOUND)
        """
        with self._lock:
            messages = self._rooms.get(room_name)
            if messages is None:
                return Failure(ErrorKind.ROOM_NOT_FOUND, ROOM_NOT_FOUND)
            return Ok(list(messages))

    def create_room(self, room_name: Any) -> Result[Room]:
        """
        Create a new, empty room.

        Args:
            room_name: Unique name of the room

        Returns:
            Ok with the new Room, Failure(INVALID_ARGUMENT) when the name is
            missing or Failure(ROOM_ALREADY_EXISTS) when it is taken
        """
        request = CreateRoomInput(room_name=room_name)
        problem = request.problem()
        if problem:
            return Failure(ErrorKind.INVALID_ARGUMENT, problem)

        with self._lock:
            if request.room_name in self._rooms:
                logger.info("Room %r already exists", request.room_name)
                return Failure(ErrorKind.ROOM_ALREADY_EXISTS, ROOM_ALREADY_EXISTS)
            self._rooms[request.room_name] = []

        logger.info(f"✓ Created room: {request.room_name}")
        return Ok(Room(room_name=request.room_name, messages=[]))

    def post_message(
        self,
        room_name: str,
        username: Any,
        message: Any,
    ) -> Result[Message]:
        """
        Append a message to a room.

        The room is checked before the body, so posting anything to an
        unknown room reports ROOM_NOT_FOUND.

        Args:
            room_name: Name of the target room
            username: Author of the message
            message: Message body

        Returns:
            Ok with the stored Message, or a Failure
        """
        request = PostMessageInput(room_name=room_name, username=username, message=message)

        with self._lock:
            messages = self._rooms.get(request.room_name)
            if messages is None:
                return Failure(ErrorKind.ROOM_NOT_FOUND, ROOM_NOT_FOUND)

            problem = request.problem()
            if problem:
                return Failure(ErrorKind.INVALID_ARGUMENT, problem)

            stored = Message(
                username=request.username,
                message=request.message,
                timestamp=format_timestamp(self._clock()),
            )
            messages.append(stored)

        logger.debug("📨 %s posted to room %s", stored.username, request.room_name)
        return Ok(stored)

    def stats(self) -> Dict[str, int]:
        """Counts of rooms and messages, for the health endpoint."""
        with self._lock:
            return {
                "rooms": len(self._rooms),
                "messages": sum(len(messages) for messages in self._rooms.values()),
            }
