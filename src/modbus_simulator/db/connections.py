"""
Connection database operations.

Handles CRUD operations for the connections table and the connection tree read.
Uses SQLAlchemy 2.0+ async ORM.
"""

import uuid
from typing import List

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from modbus_simulator.config import settings
from modbus_simulator.db.integrity import is_unique_violation, violated_field
from modbus_simulator.db.session import get_session
from modbus_simulator.logger import get_logger
from modbus_simulator.schemas.db_models.models import (
    ConnectionCreate,
    ConnectionResponse,
    ConnectionTree,
    ConnectionUpdate,
)
from modbus_simulator.schemas.db_models.orm_models import Connection
from modbus_simulator.utils.exceptions import AppError, ConflictError, InternalError, NotFoundError

logger = get_logger(__name__)

CONNECTION_UNIQUE_MARKERS = {
    "name": ("uq_connections_name", "connections.name"),
    "port": ("uq_connections_port", "connections.port"),
}

CONFLICT_MESSAGES = {
    "name": "Connection name already exists",
    "port": "Port already in use",
}


async def _next_available_port(session: AsyncSession) -> int:
    result = await session.execute(select(func.max(Connection.port)))
    max_port = result.scalar_one_or_none()
    return max(max_port or 0, settings.auto_port_base) + 1


def _conflict_from(error: IntegrityError) -> AppError:
    if not is_unique_violation(error):
        return InternalError(f"Database constraint violation: {error.orig}")
    field = violated_field(error, CONNECTION_UNIQUE_MARKERS)
    message = CONFLICT_MESSAGES.get(field, "Connection conflicts with an existing connection")
    return ConflictError(message, field=field)


async def create_connection(connection: ConnectionCreate) -> ConnectionResponse:
    """
    Create a new connection in the database.

    A port of 0 is replaced by the next available port,
    max(existing ports, AUTO_PORT_BASE) + 1.

    Args:
        connection: Connection creation data

    Returns:
        Created connection with its ID and final port

    Raises:
        ConflictError: If the name or port is already used
        InternalError: For other database errors
    """
    async with get_session() as session:
        try:
            port = connection.port
            if port == 0:
                port = await _next_available_port(session)

            new_connection = Connection(
                id=uuid.uuid4().hex,
                name=connection.name,
                port=port,
                protocol_type=int(connection.protocol_type),
            )
            session.add(new_connection)
            await session.commit()

            logger.info(f"Created connection: {new_connection.name} (ID: {new_connection.id}, port: {port})")
            return ConnectionResponse.model_validate(new_connection)

        except IntegrityError as e:
            await session.rollback()
            error = _conflict_from(e)
            logger.warning(f"Failed to create connection '{connection.name}': {error.message}")
            raise error from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error creating connection '{connection.name}': {e}", exc_info=True)
            raise InternalError(f"Failed to create connection '{connection.name}'") from e


async def update_connection(connection_id: str, connection_update: ConnectionUpdate) -> ConnectionResponse:
    """
    Update a connection's name, port and protocol type.

    Args:
        connection_id: Connection ID
        connection_update: New connection values

    Returns:
        Updated connection

    Raises:
        NotFoundError: If the connection doesn't exist
        ConflictError: If the name or port belongs to another connection
        InternalError: For other database errors
    """
    async with get_session() as session:
        try:
            result = await session.execute(
                select(Connection).where(Connection.id == connection_id)
            )
            connection = result.scalar_one_or_none()
            if connection is None:
                raise NotFoundError(f"Connection with id '{connection_id}' not found", field="connection_id")

            port_owner = await session.execute(
                select(Connection.id).where(
                    Connection.port == connection_update.port,
                    Connection.id != connection_id,
                )
            )
            if port_owner.first() is not None:
                raise ConflictError(CONFLICT_MESSAGES["port"], field="port")

            connection.name = connection_update.name
            connection.port = connection_update.port
            connection.protocol_type = int(connection_update.protocol_type)
            await session.commit()

            logger.info(f"Updated connection with id {connection_id}")
            return ConnectionResponse.model_validate(connection)

        except AppError:
            await session.rollback()
            raise
        except IntegrityError as e:
            await session.rollback()
            error = _conflict_from(e)
            logger.warning(f"Failed to update connection {connection_id}: {error.message}")
            raise error from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error updating connection {connection_id}: {e}", exc_info=True)
            raise InternalError(f"Failed to update connection '{connection_id}'") from e


async def delete_connection(connection_id: str) -> None:
    """
    Delete a connection. Its slaves and registers go with it (ON DELETE CASCADE).

    Args:
        connection_id: Connection ID

    Raises:
        NotFoundError: If no connection was deleted
        InternalError: For database errors
    """
    async with get_session() as session:
        try:
            result = await session.execute(
                delete(Connection).where(Connection.id == connection_id)
            )
            if result.rowcount == 0:
                raise NotFoundError(f"Connection with id '{connection_id}' not found", field="connection_id")
            await session.commit()
            logger.info(f"Deleted connection with id {connection_id}")

        except AppError:
            await session.rollback()
            raise
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error deleting connection {connection_id}: {e}", exc_info=True)
            raise InternalError(f"Failed to delete connection '{connection_id}'") from e


async def get_connections_tree() -> List[ConnectionTree]:
    """
    Get every connection with its slaves.

    Returns:
        Connections ordered by name, each with slaves ordered by slave address
    """
    async with get_session() as session:
        try:
            result = await session.execute(
                select(Connection)
                .options(selectinload(Connection.slaves))
                .order_by(Connection.name)
            )
            connections = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Database error reading connection tree: {e}", exc_info=True)
            raise InternalError("Failed to read connection tree") from e

        return [ConnectionTree.model_validate(connection) for connection in connections]
