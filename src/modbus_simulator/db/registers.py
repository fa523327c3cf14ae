"""
Register database operations.

Handles CRUD operations for the registers table.
Uses SQLAlchemy 2.0+ async ORM.
"""

import uuid
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from modbus_simulator.db.integrity import is_foreign_key_violation, is_unique_violation
from modbus_simulator.db.session import get_session
from modbus_simulator.logger import get_logger
from modbus_simulator.schemas.db_models.models import RegisterCreate, RegisterResponse, RegisterUpdate
from modbus_simulator.schemas.db_models.orm_models import Register
from modbus_simulator.utils.exceptions import AppError, ConflictError, InternalError, NotFoundError

logger = get_logger(__name__)

DUPLICATE_START_ADDRESS_MESSAGE = "A register with the same start address already exists on this slave"


def _translate_integrity_error(error: IntegrityError) -> AppError:
    if is_foreign_key_violation(error):
        return NotFoundError("Slave not found", field="slave_id")
    if is_unique_violation(error):
        return ConflictError(DUPLICATE_START_ADDRESS_MESSAGE, field="start_address")
    return InternalError(f"Database constraint violation: {error.orig}")


async def get_registers_by_slave_id(slave_id: str) -> List[RegisterResponse]:
    """
    Get all registers of a slave.

    Args:
        slave_id: Slave ID

    Returns:
        Registers ordered by start address (empty if the slave has none)
    """
    async with get_session() as session:
        try:
            result = await session.execute(
                select(Register)
                .where(Register.slave_id == slave_id)
                .order_by(Register.start_address)
            )
            registers = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Database error reading registers of slave {slave_id}: {e}", exc_info=True)
            raise InternalError(f"Failed to read registers of slave '{slave_id}'") from e

        return [RegisterResponse.model_validate(register) for register in registers]


async def create_register(slave_id: str, register: RegisterCreate) -> RegisterResponse:
    """
    Create a new register under a slave.

    The payload is stored as given; callers normalise it first.

    Args:
        slave_id: Parent slave ID
        register: Register creation data

    Returns:
        Created register with its ID

    Raises:
        ConflictError: If the slave already has a register at this start address
        NotFoundError: If the slave disappeared before the insert
        InternalError: For other database errors
    """
    async with get_session() as session:
        try:
            new_register = Register(
                id=uuid.uuid4().hex,
                slave_id=slave_id,
                start_address=register.start_address,
                hex_payload=register.hex_payload,
                names=register.names,
                coefficients=register.coefficients,
            )
            session.add(new_register)
            await session.commit()

            logger.info(
                f"Created register at {new_register.start_address} (ID: {new_register.id}) on slave {slave_id}"
            )
            return RegisterResponse.model_validate(new_register)

        except IntegrityError as e:
            await session.rollback()
            error = _translate_integrity_error(e)
            logger.warning(
                f"Failed to create register at {register.start_address} on slave {slave_id}: {error.message}"
            )
            raise error from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error creating register on slave {slave_id}: {e}", exc_info=True)
            raise InternalError(f"Failed to create register on slave '{slave_id}'") from e


async def update_register(slave_id: str, register_id: str, register_update: RegisterUpdate) -> RegisterResponse:
    """
    Update a register's address, payload and metadata.

    Args:
        slave_id: Slave the register must belong to
        register_id: Register ID
        register_update: New register values

    Returns:
        Updated register

    Raises:
        NotFoundError: If the slave has no register with this ID
        ConflictError: If another register of the slave has the new start address
        InternalError: For other database errors
    """
    async with get_session() as session:
        try:
            result = await session.execute(
                select(Register).where(Register.id == register_id, Register.slave_id == slave_id)
            )
            register = result.scalar_one_or_none()
            if register is None:
                raise NotFoundError(
                    f"Register with id '{register_id}' not found on slave '{slave_id}'",
                    field="register_id",
                )

            register.start_address = register_update.start_address
            register.hex_payload = register_update.hex_payload
            register.names = register_update.names
            register.coefficients = register_update.coefficients
            await session.commit()

            logger.info(f"Updated register with id {register_id}")
            return RegisterResponse.model_validate(register)

        except AppError:
            await session.rollback()
            raise
        except IntegrityError as e:
            await session.rollback()
            error = _translate_integrity_error(e)
            logger.warning(f"Failed to update register {register_id}: {error.message}")
            raise error from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error updating register {register_id}: {e}", exc_info=True)
            raise InternalError(f"Failed to update register '{register_id}'") from e


async def delete_register(slave_id: str, register_id: str) -> None:
    """
    Delete a register of a slave.

    Args:
        slave_id: Slave the register must belong to
        register_id: Register ID

    Raises:
        NotFoundError: If the slave has no register with this ID
        InternalError: For database errors
    """
    async with get_session() as session:
        try:
            result = await session.execute(
                delete(Register).where(Register.id == register_id, Register.slave_id == slave_id)
            )
            if result.rowcount == 0:
                raise NotFoundError(
                    f"Register with id '{register_id}' not found on slave '{slave_id}'",
                    field="register_id",
                )
            await session.commit()
            logger.info(f"Deleted register with id {register_id}")

        except AppError:
            await session.rollback()
            raise
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error deleting register {register_id}: {e}", exc_info=True)
            raise InternalError(f"Failed to delete register '{register_id}'") from e
