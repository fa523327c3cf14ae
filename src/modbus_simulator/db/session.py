"""
SQLAlchemy async session management utilities.

Provides helper functions for working with async database sessions.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator
from sqlalchemy.ext.asyncio import AsyncSession

from modbus_simulator.db.connection import get_async_session_factory


@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    """
    Get async database session.

    Usage:
        async with get_session() as session:
            result = await session.execute(select(Model))
            ...

    Yields:
        AsyncSession: Database session
    """
    factory = get_async_session_factory()

    async with factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
