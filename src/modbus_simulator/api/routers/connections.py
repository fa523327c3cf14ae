"""Connection management endpoints."""

from typing import List

from fastapi import APIRouter, HTTPException, Response, status

from modbus_simulator.helpers import connections as connection_service
from modbus_simulator.logger import get_logger
from modbus_simulator.schemas.db_models.models import (
    ConnectionCreate,
    ConnectionResponse,
    ConnectionTree,
    ConnectionUpdate,
)
from modbus_simulator.utils.exceptions import AppError, InternalError

router = APIRouter(prefix="/connections", tags=["connections"])
logger = get_logger(__name__)


@router.get("/tree", response_model=List[ConnectionTree])
async def get_connections_tree_endpoint():
    """
    Get every connection with its slaves.

    Returns:
        Connections ordered by name, each with its slaves ordered by address
    """
    try:
        return await connection_service.get_connections_tree()
    except AppError as e:
        raise HTTPException(status_code=e.http_status_code, detail=e.to_detail())
    except Exception as e:
        logger.error(f"Error getting connections tree: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=InternalError("Failed to retrieve connections").to_detail(),
        )


@router.post("", response_model=ConnectionResponse, status_code=status.HTTP_201_CREATED)
async def create_connection_endpoint(connection: ConnectionCreate):
    """
    Create a new connection.

    A port of 0 (or none) gets the next free port assigned.

    Raises:
        HTTPException: 400 on invalid input, 409 if the name or port is taken
    """
    try:
        return await connection_service.create_connection(connection)
    except AppError as e:
        raise HTTPException(status_code=e.http_status_code, detail=e.to_detail())
    except Exception as e:
        logger.error(f"Error creating connection: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=InternalError("Failed to create connection").to_detail(),
        )


@router.put("/{connection_id}", response_model=ConnectionResponse)
async def update_connection_endpoint(connection_id: str, connection: ConnectionUpdate):
    """
    Update a connection.

    Raises:
        HTTPException: 400 on invalid input, 404 if not found, 409 if the name or port is taken
    """
    try:
        return await connection_service.update_connection(connection_id, connection)
    except AppError as e:
        raise HTTPException(status_code=e.http_status_code, detail=e.to_detail())
    except Exception as e:
        logger.error(f"Error updating connection {connection_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=InternalError("Failed to update connection").to_detail(),
        )


@router.delete("/{connection_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_connection_endpoint(connection_id: str):
    """
    Delete a connection together with its slaves and registers.

    Raises:
        HTTPException: 404 if not found
    """
    try:
        await connection_service.delete_connection(connection_id)
    except AppError as e:
        raise HTTPException(status_code=e.http_status_code, detail=e.to_detail())
    except Exception as e:
        logger.error(f"Error deleting connection {connection_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=InternalError("Failed to delete connection").to_detail(),
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
