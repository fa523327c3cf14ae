"""API request/response models not backed by a database table."""

from modbus_simulator.schemas.api_models.models import HealthResponse

__all__ = ["HealthResponse"]
