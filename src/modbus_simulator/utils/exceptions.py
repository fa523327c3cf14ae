"""
Custom application exceptions.

Provides a structured way to handle errors across the application layers.
Every error renders to a stable (kind, message, field) triple.
"""

from typing import Any, Optional, Dict
from fastapi import status


class AppError(Exception):
    """Base class for all application errors."""
    kind = "internal"
    http_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.field = field
        self.payload = payload

    def to_detail(self) -> Dict[str, Any]:
        """Render the error as an API error body."""
        detail: Dict[str, Any] = {"error": self.kind, "message": self.message, "field": self.field}
        if self.payload:
            detail.update(self.payload)
        return detail


class NotFoundError(AppError):
    """Raised when a requested resource, or one of its ancestors, is not found."""
    kind = "not_found"
    http_status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    """Raised when an operation conflicts with existing data (e.g., duplicate unique field)."""
    kind = "conflict"
    http_status_code = status.HTTP_409_CONFLICT


class ValidationError(AppError):
    """Raised when input validation fails in the logic layer."""
    kind = "validation"
    http_status_code = status.HTTP_400_BAD_REQUEST


class AddressRangeError(ValidationError):
    """Raised when a register start address falls outside every Modbus address class."""


class PayloadLengthError(ValidationError):
    """Raised when a hex payload length does not fit its register class."""


class InternalError(AppError):
    """Raised for unexpected internal errors."""
    kind = "internal"
    http_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
