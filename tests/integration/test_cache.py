"""
Tests for the Redis cache service and the per-endpoint register cache.

Run with: pytest tests/integration/test_cache.py -v
"""

import pytest

from modbus_simulator.cache import CacheService, EndpointKey, RegisterCache, check_redis_health
from modbus_simulator.helpers import connections as connection_service
from modbus_simulator.helpers import slaves as slave_service
from modbus_simulator.schemas.db_models.models import ConnectionCreate, RegisterResponse, SlaveCreate


@pytest.fixture
def cache() -> CacheService:
    return CacheService(key_prefix="test", default_ttl=300)


@pytest.fixture
def register_cache(cache) -> RegisterCache:
    return RegisterCache(cache_service=cache, ttl=600)


def make_register(start_address: int, hex_payload: str) -> RegisterResponse:
    return RegisterResponse(
        id=f"reg{start_address}",
        slave_id="slave1",
        start_address=start_address,
        hex_payload=hex_payload,
    )


async def test_redis_connection(fake_redis):
    """Test Redis connection."""
    assert await check_redis_health() is True

    fake_redis.fail = True
    assert await check_redis_health() is False


async def test_cache_set_get(cache, fake_redis):
    """Test basic set and get operations."""
    test_value = {"test": "data", "number": 123}

    assert await cache.set("set_get", test_value, ttl=60) is True
    assert await cache.get("set_get") == test_value
    assert "test:set_get" in fake_redis.store


async def test_cache_string(cache):
    """Test caching string values."""
    await cache.set("string", "simple string", ttl=60)
    assert await cache.get("string") == "simple string"


async def test_cache_delete(cache):
    """Test delete operation."""
    await cache.set("delete", {"data": "test"}, ttl=60)

    assert await cache.delete("delete") is True
    assert await cache.get("delete") is None
    # A miss is not an error
    assert await cache.delete("delete") is False


async def test_cache_ttl(cache, fake_redis):
    """Entries are written with an explicit or the default TTL."""
    await cache.set("ttl", {"data": "test"}, ttl=120)
    assert fake_redis.store["test:ttl"][1] == 120

    await cache.set("default_ttl", {"data": "test"})
    assert fake_redis.store["test:default_ttl"][1] == 300


async def test_cache_failures_are_misses(cache, fake_redis):
    """Redis errors never escape the cache service."""
    fake_redis.fail = True

    assert await cache.set("down", {"data": "test"}) is False
    assert await cache.get("down") is None
    assert await cache.delete("down") is False


def test_endpoint_key_format():
    assert EndpointKey(502, 1).cache_key() == "port_slave_registers:502:1"


async def test_register_cache_round_trip(register_cache, fake_redis):
    key = EndpointKey(502, 1)
    registers = [make_register(40001, "ABCD"), make_register(40002, "0001")]

    assert await register_cache.get(key) is None
    assert await register_cache.set(key, registers) is True

    assert await register_cache.get(key) == registers
    assert fake_redis.store["test:port_slave_registers:502:1"][1] == 600


async def test_invalidate_reports_removal(register_cache):
    key = EndpointKey(502, 1)
    await register_cache.set(key, [make_register(1, "FF")])

    assert await register_cache.invalidate(key) is True
    assert await register_cache.invalidate(key) is False
    assert await register_cache.get(key) is None


async def test_invalidate_survives_redis_failure(register_cache, fake_redis):
    fake_redis.fail = True
    assert await register_cache.invalidate(EndpointKey(502, 1)) is False


async def test_invalidate_many_deduplicates(register_cache, fake_redis):
    count = await register_cache.invalidate_many(
        [EndpointKey(502, 1), EndpointKey(502, 2), EndpointKey(502, 1)]
    )
    assert count == 2
    assert fake_redis.deleted_keys == [
        "test:port_slave_registers:502:1",
        "test:port_slave_registers:502:2",
    ]


async def test_invalidate_for_connection(register_cache):
    connection = await connection_service.create_connection(ConnectionCreate(name="Main"))
    await slave_service.create_slave(connection.id, SlaveCreate(name="A", slave_address=1))
    await slave_service.create_slave(connection.id, SlaveCreate(name="B", slave_address=2))
    for address in (1, 2):
        await register_cache.set(EndpointKey(connection.port, address), [make_register(1, "FF")])

    assert await register_cache.invalidate_for_connection(connection.id) == 2
    assert await register_cache.get(EndpointKey(connection.port, 1)) is None
    assert await register_cache.get(EndpointKey(connection.port, 2)) is None


async def test_invalidate_for_missing_connection_is_noop(register_cache, fake_redis):
    assert await register_cache.invalidate_for_connection("does-not-exist") == 0
    assert fake_redis.deleted_keys == []
