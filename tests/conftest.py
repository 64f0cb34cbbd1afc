"""
Pytest configuration: a throwaway sqlite database, the mock image gateway,
and an HTTP client bound to the ASGI app.
"""

import os
import tempfile

# Must be in place before restaurant_api reads its settings
_db_dir = tempfile.mkdtemp(prefix="restaurant-api-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENV_MODE"] = "development"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event

from restaurant_api.core.security import get_token_verifier
from restaurant_api.database import async_session_maker, drop_db, engine, init_db
from restaurant_api.main import app
from restaurant_api.services.images import MockImageService, get_image_service


@event.listens_for(engine.sync_engine, "connect")
def enable_foreign_keys(dbapi_connection, connection_record):
    """sqlite only checks foreign keys when asked to, per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def database():
    """Fresh tables for every test."""
    await drop_db()
    await init_db()
    yield async_session_maker
    await drop_db()


@pytest.fixture
def image_service() -> MockImageService:
    """Mock image gateway installed in place of the configured one."""
    service = MockImageService()
    app.dependency_overrides[get_image_service] = lambda: service
    yield service
    app.dependency_overrides.pop(get_image_service, None)


@pytest.fixture
async def client(database, image_service):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth():
    """Build the cookie header for a user id."""
    verifier = get_token_verifier()

    def _auth(user_id: int) -> dict[str, str]:
        return {"Cookie": f"token={verifier.issue(user_id)}"}

    return _auth
