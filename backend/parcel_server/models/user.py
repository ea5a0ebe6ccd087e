"""
Parcel Server — User SQLAlchemy Model
======================================

What:  ORM model representing the `users` collection.
Why:   Stores the role that gates admin- and rider-only routes.
How:   One row per email (unique). Created on first sign-in; the role is only
       changed by an admin or by rider activation.

role is nullable: documents created by older clients carry no role and
read as "user".
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from parcel_server.database import Base
from parcel_server.models.enums import UserRole


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    role: Mapped[Optional[str]] = mapped_column(
        String(20), nullable=True, default=UserRole.USER.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    last_log_in: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<User(email='{self.email}', role='{self.role}')>"
