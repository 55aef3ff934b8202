# chatboard/main.py

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from chatboard.core.config import settings
from chatboard.core.logging import setup_logging, get_logger
from chatboard.api.routes import root, health, rooms
from chatboard.api.graphql_api import create_graphql_router
from chatboard.services.room_store import RoomStore

# Configure logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Application starting - REST on %s, GraphQL on %s",
                settings.API_PREFIX, settings.GRAPHQL_PATH)
    yield
    stats = app.state.room_store.stats()
    logger.info("Application stopping - discarding %d rooms and %d messages",
                stats["rooms"], stats["messages"])


# ============================================================================
# ERROR ENVELOPE
# ============================================================================

async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

def create_app(store: Optional[RoomStore] = None) -> FastAPI:
    """
    Build the FastAPI application around one RoomStore.

    The store is created here (or passed in by tests) and attached to
    ``app.state``; REST routes and GraphQL resolvers both reach it through
    the ``get_room_store`` dependency.

    Args:
        store: Existing store to serve, a new empty one when omitted

    Returns:
        FastAPI: Application with REST routes under API_PREFIX and GraphQL
        at GRAPHQL_PATH
    """
    app = FastAPI(title="Chatboard", lifespan=lifespan)
    app.state.room_store = store if store is not None else RoomStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # REST routes
    app.include_router(root.router)
    app.include_router(health.router)
    app.include_router(rooms.router, prefix=settings.API_PREFIX)

    # GraphQL
    app.include_router(create_graphql_router(), prefix=settings.GRAPHQL_PATH)

    return app


app = create_app()


def run() -> None:
    import uvicorn
    uvicorn.run("chatboard.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
