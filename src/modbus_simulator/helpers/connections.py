"""Connection helper functions for DB/cache coordination."""

from typing import List

from modbus_simulator.cache.register_cache import EndpointKey, register_cache
from modbus_simulator.config import settings
from modbus_simulator.db import connections as connections_db
from modbus_simulator.helpers.validation import require_id, validate_name, validate_port
from modbus_simulator.logger import get_logger
from modbus_simulator.schemas.db_models.models import (
    ConnectionCreate,
    ConnectionResponse,
    ConnectionTree,
    ConnectionUpdate,
)
from modbus_simulator.utils.exceptions import NotFoundError

logger = get_logger(__name__)


async def get_connections_tree() -> List[ConnectionTree]:
    """Every connection with its slaves, ordered by name then slave address."""
    return await connections_db.get_connections_tree()


async def get_connection(connection_id: str) -> ConnectionTree:
    """
    Look up one connection, with its slaves, through the connection tree.

    Raises:
        NotFoundError: If no connection has this ID
    """
    connections = await connections_db.get_connections_tree()
    for connection in connections:
        if connection.id == connection_id:
            return connection
    raise NotFoundError(f"Connection with id '{connection_id}' not found", field="connection_id")


async def create_connection(request: ConnectionCreate) -> ConnectionResponse:
    """
    Create a connection, auto-assigning its port when none is given.

    Raises:
        ValidationError: If the name is blank or too long, or a given port is out of range
        ConflictError: If the name or port is already used
    """
    name = validate_name(request.name, settings.connection_name_max_length, "Connection")
    if request.port != 0:
        validate_port(request.port)

    return await connections_db.create_connection(request.model_copy(update={"name": name}))


async def update_connection(connection_id: str, request: ConnectionUpdate) -> ConnectionResponse:
    """
    Update a connection's name, port and protocol type.

    A port change moves every endpoint of the connection, so the cached
    registers of the old (port, address) pairs are dropped before the write
    and those of the new pairs after it.

    Raises:
        ValidationError: If the ID or name is blank, the name is too long or the port is out of range
        NotFoundError: If the connection doesn't exist
        ConflictError: If the name or port belongs to another connection
    """
    require_id(connection_id, "connection_id", "Connection")
    name = validate_name(request.name, settings.connection_name_max_length, "Connection")
    validate_port(request.port)

    old_keys = await register_cache.endpoint_keys_for_connection(connection_id)
    await register_cache.invalidate_many(old_keys)

    updated = await connections_db.update_connection(
        connection_id, request.model_copy(update={"name": name})
    )

    await register_cache.invalidate_many(
        EndpointKey(updated.port, key.slave_address) for key in old_keys
    )
    return updated


async def delete_connection(connection_id: str) -> None:
    """
    Delete a connection together with its slaves and registers.

    Cached registers of every endpoint of the connection are dropped before
    the delete runs.

    Raises:
        ValidationError: If the ID is blank
        NotFoundError: If the connection doesn't exist
    """
    require_id(connection_id, "connection_id", "Connection")

    invalidated = await register_cache.invalidate_for_connection(connection_id)
    logger.debug(f"Invalidated {invalidated} endpoint(s) before deleting connection {connection_id}")

    await connections_db.delete_connection(connection_id)
