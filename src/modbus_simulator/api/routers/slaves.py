"""Slave management endpoints."""

from fastapi import APIRouter, HTTPException, Response, status

from modbus_simulator.helpers import slaves as slave_service
from modbus_simulator.logger import get_logger
from modbus_simulator.schemas.db_models.models import SlaveCreate, SlaveResponse, SlaveUpdate
from modbus_simulator.utils.exceptions import AppError, InternalError

router = APIRouter(prefix="/connections/{connection_id}/slaves", tags=["slaves"])
logger = get_logger(__name__)


@router.post("", response_model=SlaveResponse, status_code=status.HTTP_201_CREATED)
async def create_slave_endpoint(connection_id: str, slave: SlaveCreate):
    """
    Create a slave under a connection.

    Raises:
        HTTPException: 400 on invalid input, 404 if the connection doesn't exist,
            409 if the address or name is taken on the connection
    """
    try:
        return await slave_service.create_slave(connection_id, slave)
    except AppError as e:
        raise HTTPException(status_code=e.http_status_code, detail=e.to_detail())
    except Exception as e:
        logger.error(f"Error creating slave on connection {connection_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=InternalError("Failed to create slave").to_detail(),
        )


@router.put("/{slave_id}", response_model=SlaveResponse)
async def update_slave_endpoint(connection_id: str, slave_id: str, slave: SlaveUpdate):
    """Update a slave's name and address."""
    try:
        return await slave_service.update_slave(connection_id, slave_id, slave)
    except AppError as e:
        raise HTTPException(status_code=e.http_status_code, detail=e.to_detail())
    except Exception as e:
        logger.error(f"Error updating slave {slave_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=InternalError("Failed to update slave").to_detail(),
        )


@router.delete("/{slave_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_slave_endpoint(connection_id: str, slave_id: str):
    """Delete a slave and its registers."""
    try:
        await slave_service.delete_slave(connection_id, slave_id)
    except AppError as e:
        raise HTTPException(status_code=e.http_status_code, detail=e.to_detail())
    except Exception as e:
        logger.error(f"Error deleting slave {slave_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=InternalError("Failed to delete slave").to_detail(),
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
