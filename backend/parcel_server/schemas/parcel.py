"""
Parcel Server — Parcel Request/Response Schemas
================================================

What:  API contract for the /parcels and /rider routes.
Why:   ParcelCreate deliberately has no ownership, status or assignment
       fields: whatever the client sends for created_by, created_at,
       payment_status or delivery_status is dropped before it reaches the
       service, which stamps those values itself.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ParcelCreate(BaseModel):
    """Client-supplied shipment details for POST /parcels."""
    title: Optional[str] = Field(default=None, max_length=255)
    parcel_type: Optional[str] = Field(default=None, max_length=50, description="document / non-document")
    weight: Optional[float] = Field(default=None, ge=0, description="Weight in kg")
    cost: Optional[float] = Field(default=None, ge=0, description="Quoted delivery cost")
    tracking_id: Optional[str] = Field(default=None, max_length=64)

    sender_name: Optional[str] = Field(default=None, max_length=255)
    sender_phone: Optional[str] = Field(default=None, max_length=50)
    sender_region: Optional[str] = Field(default=None, max_length=100)
    sender_district: Optional[str] = Field(default=None, max_length=100)
    sender_address: Optional[str] = None

    receiver_name: Optional[str] = Field(default=None, max_length=255)
    receiver_phone: Optional[str] = Field(default=None, max_length=50)
    receiver_region: Optional[str] = Field(default=None, max_length=100)
    receiver_district: Optional[str] = Field(default=None, max_length=100)
    receiver_address: Optional[str] = None

    # Unknown keys (created_by, createdAt, payment_status, ...) are discarded
    model_config = {"extra": "ignore"}


class ParcelResponse(BaseModel):
    """Full parcel document as returned by the API."""
    id: uuid.UUID
    title: Optional[str] = None
    parcel_type: Optional[str] = None
    weight: Optional[float] = None
    cost: Optional[float] = None
    tracking_id: Optional[str] = None

    sender_name: Optional[str] = None
    sender_phone: Optional[str] = None
    sender_region: Optional[str] = None
    sender_district: Optional[str] = None
    sender_address: Optional[str] = None

    receiver_name: Optional[str] = None
    receiver_phone: Optional[str] = None
    receiver_region: Optional[str] = None
    receiver_district: Optional[str] = None
    receiver_address: Optional[str] = None

    created_by: str
    created_at: datetime
    payment_status: str
    delivery_status: str

    assigned_rider_id: Optional[uuid.UUID] = None
    assigned_rider_email: Optional[str] = None
    assigned_rider_name: Optional[str] = None
    assigned_at: Optional[datetime] = None
    picked_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None

    cashout_status: Optional[str] = None
    cashed_out_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RiderAssignment(BaseModel):
    """Body of PATCH /parcels/{id}/assign."""
    rider_id: str = Field(description="Identifier of the rider to assign")
    rider_email: Optional[str] = Field(default=None, max_length=320)
    rider_name: Optional[str] = Field(default=None, max_length=255)


class DeliveryStatusUpdate(BaseModel):
    """Body of PATCH /parcels/{id}/status. Any non-empty status is accepted."""
    status: str = Field(min_length=1, max_length=50)

    @field_validator("status")
    @classmethod
    def strip_status(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("status must not be blank")
        return v


class StatusCount(BaseModel):
    """One row of GET /parcels/delivery/status-count."""
    status: str
    count: int
