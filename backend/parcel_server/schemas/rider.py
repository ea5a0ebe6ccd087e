"""
Parcel Server — Rider Request/Response Schemas
===============================================
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class RiderCreate(BaseModel):
    """Rider application form (POST /riders)."""
    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=320, description="Defaults to the caller's email")
    phone: Optional[str] = Field(default=None, max_length=50)
    age: Optional[int] = Field(default=None, ge=16, le=100)
    region: Optional[str] = Field(default=None, max_length=100)
    district: Optional[str] = Field(default=None, max_length=100)
    national_id: Optional[str] = Field(default=None, max_length=100)
    bike_brand: Optional[str] = Field(default=None, max_length=100)
    bike_registration: Optional[str] = Field(default=None, max_length=100)

    # status / work_status are server-controlled
    model_config = {"extra": "ignore"}


class RiderResponse(BaseModel):
    id: uuid.UUID
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    age: Optional[int] = None
    region: Optional[str] = None
    district: Optional[str] = None
    national_id: Optional[str] = None
    bike_brand: Optional[str] = None
    bike_registration: Optional[str] = None
    status: str
    work_status: str
    created_at: datetime

    model_config = {"from_attributes": True}


class RiderStatusUpdate(BaseModel):
    """
    Body of PATCH /riders/{id}/status.

    email: when the new status is 'active', the user with this email is
    promoted to the rider role.
    """
    status: str = Field(min_length=1, max_length=20)
    email: Optional[str] = Field(default=None, max_length=320)
