"""
Parcel Server — User Request/Response Schemas
==============================================
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def normalize_email(value: str) -> str:
    value = value.strip().lower()
    if "@" not in value or value.startswith("@") or value.endswith("@"):
        raise ValueError("must be a valid email address")
    return value


class UserCreate(BaseModel):
    """
    Body of POST /users, sent by the frontend after every sign-in.

    Only the email is read; a client-supplied role is ignored so nobody can
    sign themselves up as an admin.
    """
    email: str = Field(min_length=3, max_length=320)

    model_config = {"extra": "ignore"}

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Trims and lower-cases so 'A@x.com ' and 'a@x.com' are one user."""
        return normalize_email(v)


class UserCreateResponse(BaseModel):
    message: str
    inserted: bool = Field(description="False when the email was already registered")
    inserted_id: Optional[uuid.UUID] = None


class UserResponse(BaseModel):
    id: uuid.UUID
    email: str
    role: Optional[str] = None
    created_at: datetime
    last_log_in: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RoleResponse(BaseModel):
    role: str


class RoleUpdate(BaseModel):
    """Body of PATCH /users/{id}/role. The closed set is enforced by UserService."""
    role: str = Field(min_length=1, max_length=20)
