"""Health check endpoints."""

from fastapi import APIRouter

from modbus_simulator import __version__
from modbus_simulator.cache.connection import check_redis_health
from modbus_simulator.db.connection import check_db_health
from modbus_simulator.schemas.api_models import HealthResponse

router = APIRouter()


@router.get("/healthz", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint that verifies API is running.

    Does not touch Redis or the database.
    """
    return HealthResponse(ok=True, version=__version__, detail="API is healthy")


@router.get("/redis_health")
async def redis_health():
    """
    Redis health check endpoint.
    """
    return await check_redis_health()


@router.get("/db_health")
async def db_health():
    """
    Database health check endpoint.
    """
    return await check_db_health()
