# chatboard/api/routes/utils.py

from __future__ import annotations

from typing import Dict
import logging

from fastapi import HTTPException, status

from chatboard.models.results import ErrorKind, Ok, Result

logger = logging.getLogger(__name__)

STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.ROOM_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ROOM_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
}


def unwrap(result: Result):
    """
    Return the value of a successful store result or raise the matching
    HTTPException.

    Raises:
        HTTPException: 400 / 404 / 409 depending on the failure kind, with
        the store's message as detail
    """
    if isinstance(result, Ok):
        return result.value
    logger.info("REST request rejected: %s (%s)", result.message, result.kind.value)
    raise HTTPException(status_code=STATUS_BY_KIND[result.kind], detail=result.message)
