"""Database connection, schema and per-entity operations."""

from modbus_simulator.db.connection import (
    check_db_health,
    get_async_engine,
    get_async_session_factory,
    init_db,
    close_async_engine,
)
from modbus_simulator.db.session import get_session

__all__ = [
    "check_db_health",
    "get_async_engine",
    "get_async_session_factory",
    "init_db",
    "close_async_engine",
    "get_session",
]
