"""API test fixtures: FastAPI test client over the shared test database.

Invariants:
    - get_db dependency overridden to use the test DatabaseSessionManager
    - app.state.db points at the same manager for readiness probes

Design Decisions:
    - raise_app_exceptions=False: the catch-all handler's 500 response is
      asserted instead of the re-raised exception
"""

import pytest
from httpx import ASGITransport, AsyncClient

from library_api.infrastructure.database import DatabaseSessionManager, get_db
from library_api.main import app


@pytest.fixture
async def db_manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
async def client(db_manager):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with db_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    original_db = getattr(app.state, "db", None)
    app.state.db = db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.db = original_db


@pytest.fixture
def book_payload():
    def _make(**overrides):
        payload = {
            "title": "A", "author": "B", "genre": "FICTION",
            "isbn": "123", "copies": 2,
        }
        payload.update(overrides)
        return payload
    return _make


@pytest.fixture
def create_book(client, book_payload):
    """POST a book and return the created record."""
    async def _create(**overrides):
        res = await client.post("/api/books", json=book_payload(**overrides))
        assert res.status_code == 201, res.text
        return res.json()["data"]
    return _create
