# chatboard/models/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional, List


def _is_missing(value: Any) -> bool:
    return not isinstance(value, str) or value == ""


# ============================================================================
# DOMAIN MODELS
# ============================================================================

class Message(BaseModel):
    """A single chat message. Immutable once the store has appended it."""

    model_config = ConfigDict(frozen=True)

    username: str
    message: str
    timestamp: str


class Room(BaseModel):
    """
    A named room and its messages in chronological order.

    Serialized with the ``roomName`` key on both the REST and GraphQL side.
    """

    model_config = ConfigDict(populate_by_name=True)

    room_name: str = Field(alias="roomName")
    messages: List[Message] = Field(default_factory=list)


# ============================================================================
# VALIDATED INPUTS
# ============================================================================

class CreateRoomInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    room_name: Any = Field(default=None, alias="roomName")

    def problem(self) -> Optional[str]:
        """Return a human readable reason why this input is invalid, or None."""
        if _is_missing(self.room_name):
            return "Room name is required"
        return None


class PostMessageInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    room_name: str = Field(alias="roomName")
    username: Any = None
    message: Any = None

    def problem(self) -> Optional[str]:
        if _is_missing(self.username) or _is_missing(self.message):
            return "Username and message are required"
        return None


# ============================================================================
# REQUEST BODIES
# ============================================================================

class CreateRoomRequest(BaseModel):
    roomName: Any = None


class PostMessageRequest(BaseModel):
    username: Any = None
    message: Any = None
