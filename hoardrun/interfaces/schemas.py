"""
Pydantic schemas shared by every router.
"""

from datetime import datetime

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response returned by all error handlers."""

    error: str
    detail: str | None = None
    code: str | None = None


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    environment: str
    database: str
    missing_settings: list[str]
    timestamp: datetime


class MessageResponse(BaseModel):
    message: str
