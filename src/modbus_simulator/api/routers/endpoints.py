"""Register lookup by physical endpoint, the read path of a protocol server."""

from typing import List

from fastapi import APIRouter, HTTPException, status

from modbus_simulator.helpers import registers as register_service
from modbus_simulator.logger import get_logger
from modbus_simulator.schemas.db_models.models import RegisterResponse
from modbus_simulator.utils.exceptions import AppError, InternalError

router = APIRouter(prefix="/endpoints", tags=["endpoints"])
logger = get_logger(__name__)


@router.get("/{port}/{slave_address}/registers", response_model=List[RegisterResponse])
async def get_endpoint_registers(port: int, slave_address: int):
    """
    Get the registers served at (port, slave address).

    Answered from the register cache when possible, otherwise from the
    database, which then populates the cache.
    """
    try:
        return await register_service.get_registers_for_endpoint(port, slave_address)
    except AppError as e:
        raise HTTPException(status_code=e.http_status_code, detail=e.to_detail())
    except Exception as e:
        logger.error(f"Error reading registers for {port}/{slave_address}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=InternalError("Failed to retrieve endpoint registers").to_detail(),
        )
