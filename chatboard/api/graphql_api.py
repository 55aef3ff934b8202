# chatboard/api/graphql_api.py

from typing import Any, Dict, List, Optional
import logging

import strawberry
from fastapi import Depends
from graphql import GraphQLError
from strawberry.fastapi import GraphQLRouter
from strawberry.types import ExecutionContext, Info

from chatboard.api.deps import get_room_store
from chatboard.core.config import settings
from chatboard.models import models
from chatboard.models.results import Failure, Ok, Result
from chatboard.services.room_store import RoomStore

logger = logging.getLogger(__name__)

# ============================================================================
# ERRORS
# ============================================================================

class RoomStoreError(GraphQLError):
    """A store failure reported to the client as a GraphQL execution error."""

    def __init__(self, failure: Failure) -> None:
        super().__init__(failure.message, extensions={"code": failure.kind.value})


def unwrap(result: Result):
    if isinstance(result, Ok):
        return result.value
    logger.info("GraphQL request rejected: %s (%s)", result.message, result.kind.value)
    raise RoomStoreError(result)


def _is_store_error(error: GraphQLError) -> bool:
    return isinstance(error, RoomStoreError) or isinstance(
        error.original_error, RoomStoreError
    )


# ============================================================================
# TYPES
# ============================================================================

@strawberry.type(name="Message")
class MessageType:
    username: str
    message: str
    timestamp: str

    @classmethod
    def from_model(cls, message: models.Message) -> "MessageType":
        return cls(
            username=message.username,
            message=message.message,
            timestamp=message.timestamp,
        )


@strawberry.type(name="Room")
class RoomType:
    room_name: str
    messages: List[MessageType]

    @classmethod
    def from_model(cls, room: models.Room) -> "RoomType":
        return cls(
            room_name=room.room_name,
            messages=[MessageType.from_model(m) for m in room.messages],
        )


def _store(info: Info) -> RoomStore:
    return info.context["store"]


# ============================================================================
# QUERIES AND MUTATIONS
# ============================================================================

@strawberry.type
class Query:
    @strawberry.field
    def get_rooms(self, info: Info) -> List[RoomType]:
        return [RoomType.from_model(room) for room in _store(info).list_rooms()]

    @strawberry.field
    def get_messages(self, info: Info, room_name: str) -> List[MessageType]:
        messages = unwrap(_store(info).get_messages(room_name))
        return [MessageType.from_model(m) for m in messages]


@strawberry.type
class Mutation:
    @strawberry.mutation
    def create_room(self, info: Info, room_name: str) -> RoomType:
        return RoomType.from_model(unwrap(_store(info).create_room(room_name)))

    @strawberry.mutation
    def post_message(
        self, info: Info, room_name: str, username: str, message: str
    ) -> MessageType:
        stored = unwrap(_store(info).post_message(room_name, username, message))
        return MessageType.from_model(stored)


class ChatSchema(strawberry.Schema):
    """Schema that only logs errors the resolvers did not produce themselves."""

    def process_errors(
        self,
        errors: List[GraphQLError],
        execution_context: Optional[ExecutionContext] = None,
    ) -> None:
        unexpected = [error for error in errors if not _is_store_error(error)]
        if unexpected:
            super().process_errors(unexpected, execution_context)


schema = ChatSchema(query=Query, mutation=Mutation)


async def get_context(store: RoomStore = Depends(get_room_store)) -> Dict[str, Any]:
    return {"store": store}


def create_graphql_router() -> GraphQLRouter:
    """Build the router serving the schema, bound to the app's RoomStore."""
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if settings.GRAPHIQL else None,
    )
