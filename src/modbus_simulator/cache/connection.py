"""
Redis client lifecycle for the register cache.

One shared client per process. A client whose first ping fails is closed and
discarded, so the next cache call retries the connection instead of reusing a
dead client.
"""

from typing import Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from modbus_simulator.config import settings
from modbus_simulator.logger import get_logger

logger = get_logger(__name__)

_redis_client: Optional[aioredis.Redis] = None


def _build_client() -> aioredis.Redis:
    return aioredis.Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        db=settings.redis_db,
        password=settings.redis_password,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_socket_connect_timeout,
        max_connections=settings.redis_max_connections,
        decode_responses=settings.redis_decode_responses,
        health_check_interval=settings.redis_health_check_interval,
    )


async def get_redis_client() -> aioredis.Redis:
    """
    Return the shared Redis client, connecting on first use.

    Raises:
        RedisError: If Redis does not answer the initial ping
    """
    global _redis_client

    if _redis_client is None:
        client = _build_client()
        try:
            await client.ping()
        except RedisError as e:
            logger.error(f"Redis at {settings.redis_host}:{settings.redis_port} unreachable: {e}")
            await client.aclose()
            raise

        _redis_client = client
        logger.info(f"Register cache connected to Redis at {settings.redis_host}:{settings.redis_port}")

    return _redis_client


async def close_redis_client() -> None:
    """Close the shared client, if any. Called on application shutdown."""
    global _redis_client

    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None
        logger.info("Redis connection closed")


async def check_redis_health() -> bool:
    """True if Redis answers a ping, False otherwise."""
    try:
        client = await get_redis_client()
        await client.ping()
        return True
    except (RedisError, OSError) as e:
        logger.warning(f"Redis health check failed: {e}")
        return False
