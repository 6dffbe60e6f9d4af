"""
SpeakerDesk Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Points the app at a throwaway SQLite file before any app import,
       creates the schema per test, and talks to the app in-process over
       httpx's ASGITransport.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for pure service unit tests
    ├── database: creates tables, drops them afterwards
    ├── db_session: real AsyncSession on the test database
    ├── test_client: anonymous HTTPX AsyncClient
    ├── client_factory: builds extra clients, each with its own cookie jar
    └── owner_client / other_client: clients already signed in as two users
"""

import os
import tempfile
from typing import AsyncGenerator, Callable, List
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any app imports
_db_dir = tempfile.mkdtemp(prefix="speakerdesk_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_db_dir}/test.db"
os.environ["SECRET_KEY"] = "test-secret-key-not-real"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_CREATE_SCHEMA"] = "false"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.database import async_session_factory, create_schema, drop_schema, dispose_engine  # noqa: E402
from app.main import app  # noqa: E402

PASSWORD = "password"


def user_payload(username: str, display_name: str = "Full Name") -> dict:
    return {
        "firstName": "Full",
        "lastName": "Name",
        "displayName": display_name,
        "email": f"{username}@test.com",
        "username": username,
        "password": PASSWORD,
    }


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = speaker
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[None, None]:
    """Fresh tables for one test."""
    await create_schema()
    yield
    await drop_schema()
    await dispose_engine()


@pytest_asyncio.fixture
async def db_session(database):
    async with async_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client_factory(database) -> AsyncGenerator[Callable[[], AsyncClient], None]:
    """
    Builds AsyncClients bound to the app. Each has its own cookie jar,
    so each can hold a different session.
    """
    clients: List[AsyncClient] = []

    def make() -> AsyncClient:
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client

    yield make

    for client in clients:
        await client.aclose()


@pytest_asyncio.fixture
async def test_client(client_factory) -> AsyncClient:
    """
    Anonymous HTTP client.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    return client_factory()


async def _signed_up(client: AsyncClient, username: str, display_name: str) -> AsyncClient:
    response = await client.post("/auth/signup", json=user_payload(username, display_name))
    assert response.status_code == 200, response.text
    return client


@pytest_asyncio.fixture
async def owner_client(client_factory) -> AsyncClient:
    return await _signed_up(client_factory(), "username", "Full Name")


@pytest_asyncio.fixture
async def other_client(client_factory) -> AsyncClient:
    return await _signed_up(client_factory(), "intruder", "Other Person")


@pytest.fixture
def speaker_payload() -> dict:
    return {"name": "Speaker Name"}

