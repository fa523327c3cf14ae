"""
Register cache keyed by physical endpoint.

Holds the resolved register list of one (port, slave address) pair, the shape
a protocol server polling that endpoint reads. The database stays authoritative:
every write to a connection, slave or register invalidates the endpoints it can
affect. Invalidation is advisory. A Redis failure or an endpoint that no longer
resolves is logged and skipped, and entries still expire after
REGISTER_CACHE_TTL seconds.
"""

from typing import Iterable, NamedTuple, Optional

from modbus_simulator.cache.cache import CacheService
from modbus_simulator.config import settings
from modbus_simulator.db.connections import get_connections_tree
from modbus_simulator.logger import get_logger
from modbus_simulator.schemas.db_models.models import RegisterResponse
from modbus_simulator.utils.exceptions import AppError

logger = get_logger(__name__)


class EndpointKey(NamedTuple):
    """Cache key of one simulated device: the connection port and the slave address."""
    port: int
    slave_address: int

    def cache_key(self) -> str:
        return f"port_slave_registers:{self.port}:{self.slave_address}"


class RegisterCache:
    """Typed view over the cache service for per-endpoint register lists."""

    def __init__(self, cache_service: Optional[CacheService] = None, ttl: Optional[int] = None):
        self.cache_service = cache_service or CacheService()
        self.ttl = ttl or settings.register_cache_ttl

    async def get(self, key: EndpointKey) -> Optional[list[RegisterResponse]]:
        cached = await self.cache_service.get(key.cache_key())
        if cached is None:
            logger.debug(f"Register cache miss for {key}")
            return None
        logger.debug(f"Register cache hit for {key}")
        return [RegisterResponse(**item) for item in cached]

    async def set(self, key: EndpointKey, registers: list[RegisterResponse]) -> bool:
        return await self.cache_service.set(
            key=key.cache_key(),
            value=[register.model_dump(mode="json") for register in registers],
            ttl=self.ttl,
        )

    async def invalidate(self, key: EndpointKey) -> bool:
        """
        Drop the cached registers of one endpoint.

        Returns:
            True if an entry was removed, False on a miss or a cache failure
        """
        removed = await self.cache_service.delete(key.cache_key())
        logger.debug(f"Invalidated register cache for {key} (removed: {removed})")
        return removed

    async def invalidate_many(self, keys: Iterable[EndpointKey]) -> int:
        """Invalidate each key once. Returns the number of keys processed."""
        count = 0
        for key in dict.fromkeys(keys):
            await self.invalidate(key)
            count += 1
        return count

    async def endpoint_keys_for_connection(self, connection_id: str) -> list[EndpointKey]:
        """
        Resolve the endpoints a connection serves through the connection tree.

        Returns:
            One key per slave of the connection; empty if the connection can't be resolved
        """
        try:
            connections = await get_connections_tree()
        except AppError as e:
            logger.warning(f"Could not resolve endpoints of connection {connection_id}: {e.message}")
            return []

        connection = next((c for c in connections if c.id == connection_id), None)
        if connection is None:
            logger.info(f"Connection {connection_id} no longer exists, no endpoints to resolve")
            return []

        return [EndpointKey(connection.port, slave.slave_address) for slave in connection.slaves]

    async def invalidate_for_connection(self, connection_id: str) -> int:
        """
        Invalidate every endpoint served by a connection.

        A connection that cannot be resolved is a no-op.

        Returns:
            Number of endpoint keys processed
        """
        keys = await self.endpoint_keys_for_connection(connection_id)
        return await self.invalidate_many(keys)


# Global register cache instance
register_cache = RegisterCache()
