"""Database and ORM models."""

from modbus_simulator.schemas.db_models.orm_models import (
    Base,
    Connection,
    Slave,
    Register,
)
from modbus_simulator.schemas.db_models.types import ProtocolType

__all__ = [
    "Base",
    "Connection",
    "Slave",
    "Register",
    "ProtocolType",
]
