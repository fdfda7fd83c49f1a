"""
Module: models
Description: Package initialization for Pydantic data models.

This package contains the response models used by the HTTP layer:
- ErrorDetail / ErrorResponse: Structured error envelope
- HealthResponse: Health check payload

All models are exported here for convenient importing.
"""

from .response import ErrorDetail, ErrorResponse, HealthResponse

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
]
