"""
Redis caching service.

Provides high-level caching operations with TTL support and key prefixing.
Cache failures are logged and reported as misses; they never raise.
"""

import json
from typing import Any, Optional

from redis.exceptions import RedisError

from modbus_simulator.cache.connection import get_redis_client
from modbus_simulator.config import settings
from modbus_simulator.logger import get_logger

logger = get_logger(__name__)

CACHE_ERRORS = (RedisError, OSError)


class CacheService:
    """
    Redis-based caching service.

    Provides methods for storing and retrieving cached data with TTL support.
    Automatically handles key prefixing and JSON serialization.
    """

    def __init__(self, key_prefix: Optional[str] = None, default_ttl: Optional[int] = None):
        """
        Initialize cache service.

        Args:
            key_prefix: Prefix for all cache keys (defaults to settings.cache_key_prefix)
            default_ttl: Default TTL in seconds (defaults to settings.cache_default_ttl)
        """
        self.key_prefix = key_prefix or settings.cache_key_prefix
        self.default_ttl = default_ttl or settings.cache_default_ttl

    def _make_key(self, key: str) -> str:
        """Create a prefixed cache key."""
        return f"{self.key_prefix}:{key}"

    async def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache.

        Args:
            key: Cache key (will be prefixed automatically)

        Returns:
            Cached value if found, None otherwise
        """
        try:
            client = await get_redis_client()
            value = await client.get(self._make_key(key))
        except CACHE_ERRORS as e:
            logger.warning(f"Cache get failed for key '{key}': {e}")
            return None

        if value is None:
            return None

        # Try to deserialize JSON, fallback to raw string
        try:
            return json.loads(value)
        except (json.JSONDecodeError, TypeError):
            return value

    async def set(
        self,
        key: str,
        value: Any,
        ttl: Optional[int] = None,
    ) -> bool:
        """
        Set value in cache with optional TTL.

        Args:
            key: Cache key (will be prefixed automatically)
            value: Value to cache (will be JSON serialized if not a string)
            ttl: Time to live in seconds (defaults to self.default_ttl)

        Returns:
            True if successful, False otherwise
        """
        # Serialize value to JSON if not a string
        if isinstance(value, str):
            serialized_value = value
        else:
            serialized_value = json.dumps(value)

        ttl = ttl if ttl is not None else self.default_ttl

        try:
            client = await get_redis_client()
            await client.setex(self._make_key(key), ttl, serialized_value)
            return True
        except CACHE_ERRORS as e:
            logger.warning(f"Cache set failed for key '{key}': {e}")
            return False

    async def delete(self, key: str) -> bool:
        """
        Delete value from cache.

        Args:
            key: Cache key (will be prefixed automatically)

        Returns:
            True if a key was deleted, False on a miss or failure
        """
        try:
            client = await get_redis_client()
            result = await client.delete(self._make_key(key))
            return result > 0
        except CACHE_ERRORS as e:
            logger.warning(f"Cache delete failed for key '{key}': {e}")
            return False

