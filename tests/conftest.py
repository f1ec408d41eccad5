"""
Test configuration and fixtures.

The application runs against an in‑memory ``mongomock-motor`` database
injected through ``app.dependency_overrides``; no MongoDB server or
network access is needed.
"""

import os
import tempfile
from typing import Any, AsyncGenerator, Dict

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

# Environment must be in place before the settings module is imported.
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="tourism-uploads-"))
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_123")

from tourism_api.app.core.db import get_database, init_db  # noqa: E402
from tourism_api.app.main import app as fastapi_app  # noqa: E402

from .support import insert_user  # noqa: E402


@pytest_asyncio.fixture
async def db():
    """Fresh in-memory database per test, with the production indexes."""
    client = AsyncMongoMockClient()
    database = client["TourismDB_test"]
    await init_db(database)
    yield database


@pytest.fixture
def app(db):
    fastapi_app.dependency_overrides[get_database] = lambda: db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def admin(db) -> Dict[str, Any]:
    return await insert_user(db, "admin@example.com", role="admin", name="Admin")


@pytest_asyncio.fixture
async def tourist(db) -> Dict[str, Any]:
    return await insert_user(db, "tourist@example.com", role="tourist", name="Tina Tourist")


@pytest_asyncio.fixture
async def guide(db) -> Dict[str, Any]:
    return await insert_user(db, "guide@example.com", role="tour-guide", name="Gary Guide")
