"""
Slave database operations.

Handles CRUD operations for the slaves table.
Uses SQLAlchemy 2.0+ async ORM.
"""

import uuid

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from modbus_simulator.db.integrity import is_foreign_key_violation, is_unique_violation, violated_field
from modbus_simulator.db.session import get_session
from modbus_simulator.logger import get_logger
from modbus_simulator.schemas.db_models.models import SlaveCreate, SlaveResponse, SlaveUpdate
from modbus_simulator.schemas.db_models.orm_models import Slave
from modbus_simulator.utils.exceptions import AppError, ConflictError, InternalError, NotFoundError

logger = get_logger(__name__)

# slave_address is checked first: the name constraint's markers never mention it
SLAVE_UNIQUE_MARKERS = {
    "slave_address": ("uq_slaves_connection_id_slave_address", "slaves.slave_address"),
    "name": ("uq_slaves_connection_id_name", "slaves.name"),
}

CONFLICT_MESSAGES = {
    "slave_address": "A slave with the same address already exists on this connection",
    "name": "A slave with the same name already exists on this connection",
}


def _translate_integrity_error(error: IntegrityError) -> AppError:
    if is_foreign_key_violation(error):
        return NotFoundError("Connection not found", field="connection_id")
    if not is_unique_violation(error):
        return InternalError(f"Database constraint violation: {error.orig}")
    field = violated_field(error, SLAVE_UNIQUE_MARKERS)
    message = CONFLICT_MESSAGES.get(field, "Slave conflicts with an existing slave")
    return ConflictError(message, field=field)


async def create_slave(connection_id: str, slave: SlaveCreate) -> SlaveResponse:
    """
    Create a new slave under a connection.

    Args:
        connection_id: Parent connection ID
        slave: Slave creation data

    Returns:
        Created slave with its ID

    Raises:
        ConflictError: If the address or name is already used on the connection
        NotFoundError: If the connection disappeared before the insert
        InternalError: For other database errors
    """
    async with get_session() as session:
        try:
            new_slave = Slave(
                id=uuid.uuid4().hex,
                connection_id=connection_id,
                name=slave.name,
                slave_address=slave.slave_address,
            )
            session.add(new_slave)
            await session.commit()

            logger.info(
                f"Created slave: {new_slave.name} (ID: {new_slave.id}, address: {new_slave.slave_address}) "
                f"on connection {connection_id}"
            )
            return SlaveResponse.model_validate(new_slave)

        except IntegrityError as e:
            await session.rollback()
            error = _translate_integrity_error(e)
            logger.warning(f"Failed to create slave '{slave.name}' on connection {connection_id}: {error.message}")
            raise error from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error creating slave '{slave.name}': {e}", exc_info=True)
            raise InternalError(f"Failed to create slave '{slave.name}'") from e


async def update_slave(slave_id: str, slave_update: SlaveUpdate) -> SlaveResponse:
    """
    Update a slave's name and address.

    Args:
        slave_id: Slave ID
        slave_update: New slave values

    Returns:
        Updated slave

    Raises:
        NotFoundError: If the slave doesn't exist
        ConflictError: If the address or name is already used on the connection
        InternalError: For other database errors
    """
    async with get_session() as session:
        try:
            result = await session.execute(select(Slave).where(Slave.id == slave_id))
            slave = result.scalar_one_or_none()
            if slave is None:
                raise NotFoundError(f"Slave with id '{slave_id}' not found", field="slave_id")

            slave.name = slave_update.name
            slave.slave_address = slave_update.slave_address
            await session.commit()

            logger.info(f"Updated slave with id {slave_id}")
            return SlaveResponse.model_validate(slave)

        except AppError:
            await session.rollback()
            raise
        except IntegrityError as e:
            await session.rollback()
            error = _translate_integrity_error(e)
            logger.warning(f"Failed to update slave {slave_id}: {error.message}")
            raise error from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error updating slave {slave_id}: {e}", exc_info=True)
            raise InternalError(f"Failed to update slave '{slave_id}'") from e


async def delete_slave(slave_id: str) -> None:
    """
    Delete a slave. Its registers go with it (ON DELETE CASCADE).

    Args:
        slave_id: Slave ID

    Raises:
        NotFoundError: If no slave was deleted
        InternalError: For database errors
    """
    async with get_session() as session:
        try:
            result = await session.execute(delete(Slave).where(Slave.id == slave_id))
            if result.rowcount == 0:
                raise NotFoundError(f"Slave with id '{slave_id}' not found", field="slave_id")
            await session.commit()
            logger.info(f"Deleted slave with id {slave_id}")

        except AppError:
            await session.rollback()
            raise
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error deleting slave {slave_id}: {e}", exc_info=True)
            raise InternalError(f"Failed to delete slave '{slave_id}'") from e
