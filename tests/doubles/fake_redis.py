"""Fake Redis client for testing without a Redis server.

Implements the subset of the redis.asyncio.Redis interface used by the cache
layer, with string values as returned under decode_responses=True.
"""

from typing import Dict, List, Optional, Tuple

from redis.exceptions import ConnectionError as RedisConnectionError


class FakeRedis:
    """In-memory stand-in for redis.asyncio.Redis.

    Attributes:
        store: Key to (value, ttl) mapping
        deleted_keys: Every key passed to delete(), in call order
        fail: When True every command raises a Redis connection error

    Example:
        >>> redis = FakeRedis()
        >>> await redis.setex("prefix:key", 60, "{}")
        >>> assert await redis.get("prefix:key") == "{}"
        >>> redis.fail = True  # simulate Redis going away
    """

    def __init__(self):
        self.store: Dict[str, Tuple[str, Optional[int]]] = {}
        self.deleted_keys: List[str] = []
        self.fail = False
        self.closed = False

    def _check(self) -> None:
        if self.fail:
            raise RedisConnectionError("Fake Redis is unavailable")

    async def ping(self) -> bool:
        self._check()
        return True

    async def get(self, key: str) -> Optional[str]:
        self._check()
        entry = self.store.get(key)
        return entry[0] if entry else None

    async def setex(self, key: str, ttl: int, value: str) -> bool:
        self._check()
        self.store[key] = (value, ttl)
        return True

    async def delete(self, *keys: str) -> int:
        self._check()
        removed = 0
        for key in keys:
            self.deleted_keys.append(key)
            if self.store.pop(key, None) is not None:
                removed += 1
        return removed

    async def aclose(self) -> None:
        self.closed = True

    # Test helper methods

    def keys_matching(self, fragment: str) -> List[str]:
        """Stored keys containing fragment."""
        return [key for key in self.store if fragment in key]
