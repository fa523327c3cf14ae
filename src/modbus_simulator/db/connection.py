"""
Database connection management.

Handles SQLAlchemy 2.0+ async engine creation, connection pooling, schema
initialisation and lifecycle management. PostgreSQL (asyncpg) in production,
SQLite (aiosqlite) for local runs and tests.
"""

from typing import Optional
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker
)

from modbus_simulator.config import settings
from modbus_simulator.logger import get_logger
from modbus_simulator.schemas.db_models.orm_models import Base

logger = get_logger(__name__)

# SQLAlchemy async engine
_async_engine: Optional[AsyncEngine] = None

# SQLAlchemy async session factory
_async_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_async_engine() -> AsyncEngine:
    """
    Get or create SQLAlchemy async engine.

    Creates a new async engine with connection pooling if it doesn't exist.

    Returns:
        SQLAlchemy async engine

    Raises:
        Exception: If unable to create engine
    """
    global _async_engine

    if _async_engine is None:
        database_url = settings.database_url
        is_sqlite = database_url.startswith("sqlite")

        logger.info(f"Creating SQLAlchemy async engine ({database_url.split('://', 1)[0]})")

        try:
            if is_sqlite:
                _async_engine = create_async_engine(database_url, echo=False)
                event.listen(_async_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
            else:
                _async_engine = create_async_engine(
                    database_url,
                    # Connection pool settings
                    pool_size=settings.database_pool_size,
                    max_overflow=settings.database_max_overflow,
                    pool_pre_ping=True,  # Verify connections before using
                    pool_recycle=3600,   # Recycle connections after 1 hour
                    echo=False,
                )

            logger.info("SQLAlchemy async engine created successfully")

        except Exception as e:
            logger.error(f"Failed to create SQLAlchemy async engine: {e}")
            raise

    return _async_engine


def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Get or create SQLAlchemy async session factory.

    Returns:
        SQLAlchemy async session factory
    """
    global _async_session_factory

    if _async_session_factory is None:
        engine = get_async_engine()

        _async_session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Don't expire objects after commit (better for async)
            autoflush=False,  # Don't autoflush (explicit control)
        )

        logger.info("SQLAlchemy async session factory created")

    return _async_session_factory


async def init_db() -> None:
    """
    Create the connections, slaves and registers tables if they don't exist.

    Should be called during application startup.
    """
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema initialized")


async def check_db_health() -> bool:
    """
    Check if database connection is healthy.

    Returns:
        True if database is accessible, False otherwise
    """
    try:
        engine = get_async_engine()
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        return False


async def close_async_engine() -> None:
    """
    Close SQLAlchemy async engine and cleanup resources.

    Should be called during application shutdown.
    """
    global _async_engine, _async_session_factory

    if _async_engine is not None:
        await _async_engine.dispose()
        _async_engine = None
        _async_session_factory = None
        logger.info("SQLAlchemy async engine closed")
