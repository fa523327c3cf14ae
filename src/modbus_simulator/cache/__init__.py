"""Redis caching module."""

from modbus_simulator.cache.connection import get_redis_client, close_redis_client, check_redis_health
from modbus_simulator.cache.cache import CacheService
from modbus_simulator.cache.register_cache import EndpointKey, RegisterCache, register_cache

__all__ = [
    "get_redis_client",
    "close_redis_client",
    "check_redis_health",
    "CacheService",
    "EndpointKey",
    "RegisterCache",
    "register_cache",
]
