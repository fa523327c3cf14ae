"""Slave helper functions for DB/cache coordination."""

from modbus_simulator.cache.register_cache import EndpointKey, register_cache
from modbus_simulator.config import settings
from modbus_simulator.db import slaves as slaves_db
from modbus_simulator.helpers.connections import get_connection
from modbus_simulator.helpers.validation import require_id, validate_name, validate_slave_address
from modbus_simulator.schemas.db_models.models import (
    ConnectionTree,
    SlaveCreate,
    SlaveResponse,
    SlaveUpdate,
)
from modbus_simulator.utils.exceptions import NotFoundError


def find_slave(connection: ConnectionTree, slave_id: str) -> SlaveResponse:
    """
    Find a slave among a connection's slaves.

    Raises:
        NotFoundError: If the slave doesn't belong to the connection
    """
    for slave in connection.slaves:
        if slave.id == slave_id:
            return slave
    raise NotFoundError(
        f"Slave with id '{slave_id}' not found on connection '{connection.id}'",
        field="slave_id",
    )


async def create_slave(connection_id: str, request: SlaveCreate) -> SlaveResponse:
    """
    Create a slave under an existing connection.

    Raises:
        ValidationError: If the ID or name is blank, the name is too long or the address is out of range
        NotFoundError: If the connection doesn't exist
        ConflictError: If the address or name is already used on the connection
    """
    require_id(connection_id, "connection_id", "Connection")
    name = validate_name(request.name, settings.slave_name_max_length, "Slave")
    validate_slave_address(request.slave_address)

    connection = await get_connection(connection_id)

    created = await slaves_db.create_slave(
        connection_id, SlaveCreate(name=name, slave_address=request.slave_address)
    )
    # Drop anything left behind by an earlier slave on the same endpoint
    await register_cache.invalidate(EndpointKey(connection.port, created.slave_address))
    return created


async def update_slave(connection_id: str, slave_id: str, request: SlaveUpdate) -> SlaveResponse:
    """
    Update a slave's name and address.

    Both the old and the new (port, address) endpoints are invalidated.

    Raises:
        ValidationError: If an ID or the name is blank, the name is too long or the address is out of range
        NotFoundError: If the connection doesn't exist or the slave isn't one of its slaves
        ConflictError: If the address or name is already used on the connection
    """
    require_id(connection_id, "connection_id", "Connection")
    require_id(slave_id, "slave_id", "Slave")
    name = validate_name(request.name, settings.slave_name_max_length, "Slave")
    validate_slave_address(request.slave_address)

    connection = await get_connection(connection_id)
    existing = find_slave(connection, slave_id)

    updated = await slaves_db.update_slave(
        slave_id, SlaveUpdate(name=name, slave_address=request.slave_address)
    )
    await register_cache.invalidate_many([
        EndpointKey(connection.port, existing.slave_address),
        EndpointKey(connection.port, updated.slave_address),
    ])
    return updated


async def delete_slave(connection_id: str, slave_id: str) -> None:
    """
    Delete a slave and its registers.

    The slave's endpoint is invalidated before the delete runs.

    Raises:
        ValidationError: If an ID is blank
        NotFoundError: If the connection doesn't exist or the slave isn't one of its slaves
    """
    require_id(connection_id, "connection_id", "Connection")
    require_id(slave_id, "slave_id", "Slave")

    connection = await get_connection(connection_id)
    slave = find_slave(connection, slave_id)

    await register_cache.invalidate(EndpointKey(connection.port, slave.slave_address))
    await slaves_db.delete_slave(slave_id)
