import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from bot_dashboard.config import Settings
from bot_dashboard.db.postgres import Database
from bot_dashboard.main import create_app


@pytest.fixture
def fake_db():
    db = MagicMock(spec=Database)
    db.connect = AsyncMock()
    db.close = AsyncMock()
    db.execute = AsyncMock(return_value="INSERT 0 1")
    db.fetch = AsyncMock(return_value=[])
    db.fetchrow = AsyncMock(return_value=None)
    return db


@pytest.fixture
def test_settings():
    return Settings(DATABASE_URL="postgresql://test@localhost:5432/test", PORT=3999)


@pytest.fixture
def app(test_settings, fake_db):
    return create_app(settings=test_settings, db=fake_db)


@pytest.fixture
def client(app):
    # entering the client runs startup and shares one event loop with websockets
    with TestClient(app) as c:
        yield c
