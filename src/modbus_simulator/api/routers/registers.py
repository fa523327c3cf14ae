"""Register management endpoints."""

from typing import List

from fastapi import APIRouter, HTTPException, Response, status

from modbus_simulator.helpers import registers as register_service
from modbus_simulator.logger import get_logger
from modbus_simulator.schemas.db_models.models import RegisterCreate, RegisterResponse, RegisterUpdate
from modbus_simulator.utils.exceptions import AppError, InternalError

router = APIRouter(prefix="/connections/{connection_id}/slaves/{slave_id}/registers", tags=["registers"])
logger = get_logger(__name__)


@router.get("", response_model=List[RegisterResponse])
async def list_registers_endpoint(connection_id: str, slave_id: str):
    """
    Get the registers of a slave.

    Returns:
        Registers ordered by start address
    """
    try:
        return await register_service.list_registers(slave_id)
    except AppError as e:
        raise HTTPException(status_code=e.http_status_code, detail=e.to_detail())
    except Exception as e:
        logger.error(f"Error listing registers of slave {slave_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=InternalError("Failed to retrieve registers").to_detail(),
        )


@router.post("", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def create_register_endpoint(connection_id: str, slave_id: str, register: RegisterCreate):
    """
    Create a register on a slave.

    Raises:
        HTTPException: 400 if the address/payload pair is illegal, 404 if the
            connection or slave doesn't exist, 409 on a duplicate start address
    """
    try:
        return await register_service.create_register(connection_id, slave_id, register)
    except AppError as e:
        raise HTTPException(status_code=e.http_status_code, detail=e.to_detail())
    except Exception as e:
        logger.error(f"Error creating register on slave {slave_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=InternalError("Failed to create register").to_detail(),
        )


@router.put("/{register_id}", response_model=RegisterResponse)
async def update_register_endpoint(
    connection_id: str,
    slave_id: str,
    register_id: str,
    register: RegisterUpdate,
):
    """Update a register."""
    try:
        return await register_service.update_register(connection_id, slave_id, register_id, register)
    except AppError as e:
        raise HTTPException(status_code=e.http_status_code, detail=e.to_detail())
    except Exception as e:
        logger.error(f"Error updating register {register_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=InternalError("Failed to update register").to_detail(),
        )


@router.delete("/{register_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_register_endpoint(connection_id: str, slave_id: str, register_id: str):
    """Delete a register."""
    try:
        await register_service.delete_register(connection_id, slave_id, register_id)
    except AppError as e:
        raise HTTPException(status_code=e.http_status_code, detail=e.to_detail())
    except Exception as e:
        logger.error(f"Error deleting register {register_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=InternalError("Failed to delete register").to_detail(),
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
