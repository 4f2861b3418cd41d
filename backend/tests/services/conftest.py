"""Service test fixtures — per-test SQLite database + FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite file under tmp_path (one connection per
      concurrent session, so racing requests really race)
    - The module-level db_manager is swapped for the test manager and restored
    - The password hasher is overridden with a cheap work factor

Design Decisions:
    - File database over :memory:: the in-memory engine shares one connection,
      which would let two racing transactions see each other's rows
"""

import pytest
from httpx import ASGITransport, AsyncClient

import records_api.infrastructure.database as db_module
from records_api.api.dependencies import get_password_hasher
from records_api.infrastructure.database import DatabaseSessionManager
from records_api.infrastructure.password_hasher import PasswordHasher
from records_api.main import app


@pytest.fixture
def fast_hasher():
    return PasswordHasher(iterations=1000)


@pytest.fixture
async def test_manager(tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await manager.connect()
    yield manager
    await manager.dispose()


@pytest.fixture
async def test_db(test_manager):
    async with test_manager.session() as session:
        yield session


async def _client_for(manager, hasher):
    saved_manager = db_module.db_manager
    db_module.db_manager = manager
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test",
        ) as c:
            yield c
    finally:
        app.dependency_overrides.clear()
        db_module.db_manager = saved_manager


@pytest.fixture
async def client(test_manager, fast_hasher):
    """FastAPI test client backed by a connected SQLite database."""
    async for c in _client_for(test_manager, fast_hasher):
        yield c


@pytest.fixture
async def disconnected_client(tmp_path, fast_hasher):
    """Test client whose database cannot be opened (directory does not exist)."""
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'test.db'}",
    )
    assert await manager.connect() is False
    async for c in _client_for(manager, fast_hasher):
        yield c
    await manager.dispose()


@pytest.fixture
def signup(client):
    """POST /api/signup helper returning the response."""
    async def _signup(username: str, email: str, password: str = "pw123456"):
        return await client.post(
            "/api/signup",
            json={"username": username, "email": email, "password": password},
        )
    return _signup
