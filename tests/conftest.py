"""Fixtures de test / Test fixtures.

Base SQLite temporaire, recreee pour chaque test / Temporary SQLite database, recreated per test.
"""

import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="vehicle_tracker_tests_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "development"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from vehicle_tracker.database import async_session, drop_db, init_db  # noqa: E402
from vehicle_tracker.main import app  # noqa: E402


@pytest.fixture
async def db():
    await drop_db()
    await init_db()
    yield


@pytest.fixture
async def session(db):
    async with async_session() as s:
        yield s


@pytest.fixture
async def client(db):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
