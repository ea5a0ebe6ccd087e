"""
Parcel Server — Shared Response Schemas
========================================

What:  Response envelopes reused by several routers (write acknowledgements,
       errors, health).
Why:   Every write route answers in the same shape, so the frontend can treat
       "inserted", "modified" and "deleted" results uniformly.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, Field


class InsertedResponse(BaseModel):
    """Acknowledgement for a created document (HTTP 201)."""
    message: str = Field(description="Human-readable success message")
    inserted_id: uuid.UUID = Field(description="Identifier of the new document")


class UpdatedResponse(BaseModel):
    """Acknowledgement for an update that matched at least one document."""
    message: str = Field(description="Human-readable success message")
    modified_count: int = Field(description="Number of documents updated")


class DeletedResponse(BaseModel):
    message: str = Field(description="Human-readable success message")
    deleted_count: int = Field(description="Number of documents deleted")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "parcel with ID '3f1c…' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
