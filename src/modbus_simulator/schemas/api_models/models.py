"""Pydantic models for API-only responses."""

from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response model for health check."""
    ok: bool
    version: str
    detail: Optional[str] = None
