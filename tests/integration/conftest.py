"""Fixtures for tests that run against a real database and a fake Redis."""

import pytest

from modbus_simulator.cache import cache as cache_module
from modbus_simulator.cache import connection as redis_connection
from modbus_simulator.config import settings
from modbus_simulator.db.connection import close_async_engine, init_db
from tests.doubles import FakeRedis


@pytest.fixture(autouse=True)
async def database(tmp_path, monkeypatch):
    """A fresh SQLite database per test, with the schema created."""
    await close_async_engine()
    monkeypatch.setattr(
        settings,
        "database_url_override",
        f"sqlite+aiosqlite:///{tmp_path / 'modbus_simulator.db'}",
    )
    await init_db()
    yield
    await close_async_engine()


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch) -> FakeRedis:
    """Replace the Redis client with an in-memory fake."""
    redis = FakeRedis()

    async def get_fake_redis_client():
        if redis.fail:
            await redis.ping()
        return redis

    monkeypatch.setattr(cache_module, "get_redis_client", get_fake_redis_client)
    monkeypatch.setattr(redis_connection, "get_redis_client", get_fake_redis_client)
    return redis
