"""
Parcel Server — Rider SQLAlchemy Model
=======================================

What:  ORM model representing the `riders` collection (rider applications).
Lifecycle:
    pending (self-registered) → approved / active (admin decision)
    work_status: idle ⇄ in_delivery (assignment / delivery completion)

No uniqueness on email: a person may apply more than once.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from parcel_server.database import Base
from parcel_server.models.enums import RiderStatus, WorkStatus


class Rider(Base):
    __tablename__ = "riders"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[Optional[str]] = mapped_column(String(255))
    email: Mapped[Optional[str]] = mapped_column(String(320), index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    age: Mapped[Optional[int]] = mapped_column(Integer)
    region: Mapped[Optional[str]] = mapped_column(String(100))
    district: Mapped[Optional[str]] = mapped_column(String(100), index=True)
    national_id: Mapped[Optional[str]] = mapped_column(String(100))
    bike_brand: Mapped[Optional[str]] = mapped_column(String(100))
    bike_registration: Mapped[Optional[str]] = mapped_column(String(100))

    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=RiderStatus.PENDING.value, index=True,
    )
    work_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=WorkStatus.IDLE.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<Rider(id={self.id}, status='{self.status}', work_status='{self.work_status}')>"
