"""Test doubles for unit and integration testing.

Fakes are lightweight working implementations of the interfaces the code
under test talks to. They keep state in memory, so tests run without a
Redis server and can inspect what was written.

Example:
    >>> from tests.doubles import FakeRedis
    >>> redis = FakeRedis()
    >>> await redis.setex("key", 60, "value")
    >>> assert await redis.get("key") == "value"
"""

from tests.doubles.fake_redis import FakeRedis

__all__ = ["FakeRedis"]
