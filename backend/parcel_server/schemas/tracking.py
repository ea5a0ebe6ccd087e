"""
Parcel Server — Tracking Event Schemas
=======================================
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class TrackingCreate(BaseModel):
    """Body of POST /trackings. The timestamp is always server-side."""
    tracking_id: str = Field(min_length=1, max_length=64)
    status: str = Field(min_length=1, max_length=50)
    message: Optional[str] = None
    update_by: Optional[str] = Field(default=None, max_length=320)

    model_config = {"extra": "ignore", "str_strip_whitespace": True}


class TrackingEventResponse(BaseModel):
    id: uuid.UUID
    tracking_id: str
    status: str
    message: Optional[str] = None
    update_by: Optional[str] = None
    timestamp: datetime

    model_config = {"from_attributes": True}
