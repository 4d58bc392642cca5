import pytest
from httpx import AsyncClient, ASGITransport

from app.main import app
from app.config import Config
from app.db.database import Database, get_session


@pytest.fixture
async def database(tmp_path):
    """Fresh SQLite database file per test."""
    database = Database(f"sqlite:///{tmp_path / 'inventory-test.db'}")
    await database.create_all()
    yield database
    await database.disconnect()


@pytest.fixture
async def session(database):
    async for s in database.session():
        yield s


@pytest.fixture
def no_pin(monkeypatch):
    monkeypatch.setattr(Config, "APP_PIN", "")


@pytest.fixture
async def client(database, no_pin):
    """Async test client wired to the test database, auth gate disabled."""

    async def override_session():
        async for s in database.session():
            yield s

    app.dependency_overrides[get_session] = override_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def product_payload():
    def make(title="Running Shoes", category="Shoes", **extra):
        payload = {
            "title": title,
            "price": {"selling": 1450000, "original": 11000},
            "category": category,
            "stock": 3,
            "status": "active",
        }
        payload.update(extra)
        return payload

    return make
