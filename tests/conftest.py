from datetime import datetime, timedelta, timezone
from itertools import count

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from chatboard.main import create_app
from chatboard.services.room_store import RoomStore

START = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock():
    """Clock that advances one second on every call, starting at START."""
    ticks = count()
    return lambda: START + timedelta(seconds=next(ticks))


@pytest.fixture
def store(clock):
    return RoomStore(clock=clock)


@pytest.fixture
def app(store):
    return create_app(store)


@pytest_asyncio.fixture
async def api_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def graphql(api_client):
    """POST a GraphQL document and return the decoded response body."""

    async def _execute(query, variables=None):
        response = await api_client.post(
            "/graphql", json={"query": query, "variables": variables or {}}
        )
        assert response.status_code == 200
        return response.json()

    return _execute
