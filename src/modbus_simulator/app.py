"""
FastAPI application factory.

Creates and configures the FastAPI app instance with routers and lifecycle hooks.
"""

from pathlib import Path

from fastapi import FastAPI
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from modbus_simulator import __version__
from modbus_simulator.config import settings
from modbus_simulator.logger import setup_logging, get_logger

# Router imports
from modbus_simulator.api.routers import connections, endpoints, health, registers, slaves

# Cache connection imports
from modbus_simulator.cache.connection import (
    get_redis_client,
    check_redis_health,
    close_redis_client
)

# Database connection imports
from modbus_simulator.db.connection import (
    init_db,
    check_db_health,
    close_async_engine
)

# Setup logging
setup_logging(
    log_level=settings.log_level,
    config_file=Path(settings.log_config_file) if settings.log_config_file else None,
)
logger = get_logger(__name__)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="Modbus Simulator Config",
        description="Configuration store for simulated Modbus connections, slaves and registers",
        version=__version__
    )

    # Mount routers with /api prefix
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(connections.router, prefix="/api")
    app.include_router(slaves.router, prefix="/api")
    app.include_router(registers.router, prefix="/api")
    app.include_router(endpoints.router, prefix="/api")

    # Lifecycle hooks
    @app.on_event("startup")
    async def startup():
        """Initialize services on application startup."""
        logger.info("Starting Modbus Simulator Config")
        # Initialize Redis connection
        try:
            await get_redis_client()
            health_ok = await check_redis_health()
            if health_ok:
                logger.info("Redis cache initialized successfully")
            else:
                logger.warning("Redis health check failed, but continuing startup")
        except (RedisError, OSError) as e:
            logger.error(f"Failed to initialize Redis: {e}")
            # Continue startup even if Redis fails (graceful degradation)

        # Initialize database schema
        try:
            await init_db()
            health_ok = await check_db_health()
            if health_ok:
                logger.info("Database initialized successfully")
            else:
                logger.warning("Database health check failed, but continuing startup")
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to initialize database: {e}")
            # Continue startup even if database fails (graceful degradation)

    @app.on_event("shutdown")
    async def shutdown():
        """Cleanup resources on application shutdown."""
        logger.info("Shutting down Modbus Simulator Config")
        # Close Redis connection
        await close_redis_client()
        # Close database engine
        await close_async_engine()

    logger.info("FastAPI application created")
    return app


# Create app instance
app = create_app()
