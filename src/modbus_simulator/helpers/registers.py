"""Register helper functions for DB/cache coordination."""

from typing import List, Tuple

from modbus_simulator.cache.register_cache import EndpointKey, register_cache
from modbus_simulator.db import connections as connections_db
from modbus_simulator.db import registers as registers_db
from modbus_simulator.helpers.connections import get_connection
from modbus_simulator.helpers.modbus.address_space import is_valid_hex, validate_address_and_payload
from modbus_simulator.helpers.slaves import find_slave
from modbus_simulator.helpers.validation import require_id
from modbus_simulator.logger import get_logger
from modbus_simulator.schemas.db_models.models import (
    ConnectionTree,
    RegisterCreate,
    RegisterResponse,
    RegisterUpdate,
    SlaveResponse,
)
from modbus_simulator.utils.exceptions import NotFoundError, ValidationError

logger = get_logger(__name__)


def validate_register_fields(start_address: int, hex_payload: str) -> str:
    """
    Validate a register definition.

    Checks run in order and the first failure is raised: non-negative start
    address, non-blank payload, hex-only payload, then address class and
    payload length.

    Returns:
        The payload in upper case
    """
    if start_address < 0:
        raise ValidationError("Start address must not be negative", field="start_address")
    if hex_payload is None or not hex_payload.strip():
        raise ValidationError("Hex payload must not be empty", field="hex_payload")
    if not is_valid_hex(hex_payload):
        raise ValidationError(
            "Hex payload may only contain hexadecimal digits (0-9, A-F)",
            field="hex_payload",
        )
    validate_address_and_payload(start_address, hex_payload)
    return hex_payload.upper()


async def _resolve_parents(connection_id: str, slave_id: str) -> Tuple[ConnectionTree, SlaveResponse]:
    connection = await get_connection(connection_id)
    return connection, find_slave(connection, slave_id)


async def list_registers(slave_id: str) -> List[RegisterResponse]:
    """Registers of a slave ordered by start address."""
    require_id(slave_id, "slave_id", "Slave")
    return await registers_db.get_registers_by_slave_id(slave_id)


async def get_registers_for_endpoint(port: int, slave_address: int) -> List[RegisterResponse]:
    """
    Get the registers served at (port, slave address), cache-first.

    On a miss the endpoint is resolved through the connection tree and the
    registers are read from the database and cached.

    Raises:
        NotFoundError: If no connection uses the port or it has no slave at the address
    """
    key = EndpointKey(port, slave_address)
    cached = await register_cache.get(key)
    if cached is not None:
        return cached

    connections = await connections_db.get_connections_tree()
    connection = next((c for c in connections if c.port == port), None)
    if connection is None:
        raise NotFoundError(f"No connection on port {port}", field="port")
    slave = next((s for s in connection.slaves if s.slave_address == slave_address), None)
    if slave is None:
        raise NotFoundError(
            f"No slave with address {slave_address} on port {port}",
            field="slave_address",
        )

    registers = await registers_db.get_registers_by_slave_id(slave.id)
    if not await register_cache.set(key, registers):
        logger.warning(f"Failed to cache registers for {key}")
    return registers


async def create_register(connection_id: str, slave_id: str, request: RegisterCreate) -> RegisterResponse:
    """
    Create a register under an existing (connection, slave) pair.

    Raises:
        ValidationError: If an ID is blank or the address/payload pair is illegal
        NotFoundError: If the connection or slave doesn't exist
        ConflictError: If the slave already has a register at the start address
    """
    require_id(connection_id, "connection_id", "Connection")
    require_id(slave_id, "slave_id", "Slave")
    hex_payload = validate_register_fields(request.start_address, request.hex_payload)

    connection, slave = await _resolve_parents(connection_id, slave_id)

    created = await registers_db.create_register(
        slave_id, request.model_copy(update={"hex_payload": hex_payload})
    )
    await register_cache.invalidate(EndpointKey(connection.port, slave.slave_address))
    return created


async def update_register(
    connection_id: str,
    slave_id: str,
    register_id: str,
    request: RegisterUpdate,
) -> RegisterResponse:
    """
    Update a register of an existing (connection, slave) pair.

    Raises:
        ValidationError: If an ID is blank or the address/payload pair is illegal
        NotFoundError: If the connection or slave doesn't exist, or the slave has no such register
        ConflictError: If another register of the slave has the new start address
    """
    require_id(connection_id, "connection_id", "Connection")
    require_id(slave_id, "slave_id", "Slave")
    require_id(register_id, "register_id", "Register")
    hex_payload = validate_register_fields(request.start_address, request.hex_payload)

    connection, slave = await _resolve_parents(connection_id, slave_id)

    updated = await registers_db.update_register(
        slave_id, register_id, request.model_copy(update={"hex_payload": hex_payload})
    )
    await register_cache.invalidate(EndpointKey(connection.port, slave.slave_address))
    return updated


async def delete_register(connection_id: str, slave_id: str, register_id: str) -> None:
    """
    Delete a register of an existing (connection, slave) pair.

    Raises:
        ValidationError: If an ID is blank
        NotFoundError: If the connection or slave doesn't exist, or the slave has no such register
    """
    require_id(connection_id, "connection_id", "Connection")
    require_id(slave_id, "slave_id", "Slave")
    require_id(register_id, "register_id", "Register")

    connection, slave = await _resolve_parents(connection_id, slave_id)

    await registers_db.delete_register(slave_id, register_id)
    await register_cache.invalidate(EndpointKey(connection.port, slave.slave_address))
