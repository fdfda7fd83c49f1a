"""
Module: response.py
Description: API response models for the bridge backend.

Defines the JSON bodies returned by the HTTP layer itself: the
structured error envelope and the health check payload.

Key Components:
- ErrorDetail / ErrorResponse: {"error": {"message": ..., "status": ...}}
- HealthResponse: Health check payload

Dependencies: pydantic
Author: Bridge Backend Team
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """
    Error information returned to clients.

    Attributes:
        message: Human-readable error description
        status: HTTP status code, repeated in the body
    """

    message: str = Field(
        ...,
        description="Human-readable error description"
    )
    status: int = Field(
        ...,
        description="HTTP status code"
    )


class ErrorResponse(BaseModel):
    """Error envelope: {"error": {"message": ..., "status": ...}}."""

    error: ErrorDetail = Field(
        ...,
        description="Error details"
    )

    @classmethod
    def build(cls, message: str, status: int) -> "ErrorResponse":
        """Shortcut for ErrorResponse(error=ErrorDetail(...))."""
        return cls(error=ErrorDetail(message=message, status=status))


class HealthResponse(BaseModel):
    """Health check payload."""

    status: str = Field(..., description="Service status")
    message: str = Field(..., description="Human-readable status message")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment stage")
