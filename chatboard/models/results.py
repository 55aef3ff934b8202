# chatboard/models/results.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Every way a room store operation can fail."""

    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    ROOM_ALREADY_EXISTS = "ROOM_ALREADY_EXISTS"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Failure]
