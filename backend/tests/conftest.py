"""Root conftest - shared test configuration and store fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite store and broadcaster
    - get_db / get_broadcaster dependencies overridden for the HTTP client
    - db_manager patched so the readiness check sees the test store
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

import taskboard.infrastructure.database as db_module  # noqa: E402
from taskboard.infrastructure.database import (  # noqa: E402
    DatabaseSessionManager, get_db,
)
from taskboard.infrastructure.notifications import (  # noqa: E402
    ChangeBroadcaster, get_broadcaster,
)
from taskboard.main import app  # noqa: E402


@pytest.fixture
async def test_db_manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await manager.create_schema()
    yield manager
    await manager.dispose()


@pytest.fixture
async def test_db(test_db_manager):
    async with test_db_manager.session() as session:
        yield session


@pytest.fixture
def broadcaster():
    b = ChangeBroadcaster()
    yield b
    b.close()


@pytest.fixture
async def client(test_db_manager, broadcaster):
    """FastAPI test client with store and broadcaster overridden."""
    async def override_get_db():
        async with test_db_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_broadcaster] = lambda: broadcaster

    original_manager = db_module.db_manager
    db_module.db_manager = test_db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
