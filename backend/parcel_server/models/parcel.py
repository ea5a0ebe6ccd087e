"""
Parcel Server — Parcel SQLAlchemy Model
========================================

What:  ORM model representing the `parcels` collection.
Why:   The parcel is the central document: creation, rider assignment,
       delivery status transitions, payment and cashout all mutate it.
Who:   Used by ParcelService and PaymentService through the store adapter,
       and by Alembic for schema management.

Lifecycle:
    1. Created by a signed-in user (payment_status='unpaid', delivery_status='pending')
    2. Paid: payment_status='paid' (together with a Payment record)
    3. Assigned by an admin: delivery_status='rider_assigned', assigned_rider_*
    4. Rider reports progress: 'in_transit' (picked_at), 'delivered' (delivered_at)
    5. Cashout: cashout_status='cashed_out' (cashed_out_at)

Query patterns:
    - "My parcels, newest first": WHERE created_by = :email ORDER BY created_at DESC
      → idx_parcels_created_by_created_at
    - Rider dashboards: WHERE assigned_rider_email = :email AND delivery_status IN (...)
      → idx_parcels_rider_email
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Float, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from parcel_server.database import Base
from parcel_server.models.enums import DeliveryStatus, PaymentStatus


class Parcel(Base):
    __tablename__ = "parcels"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )

    # ── Shipment details (client-supplied) ────────────────────────────────
    title: Mapped[Optional[str]] = mapped_column(String(255))
    parcel_type: Mapped[Optional[str]] = mapped_column(String(50))
    weight: Mapped[Optional[float]] = mapped_column(Float)
    cost: Mapped[Optional[float]] = mapped_column(Float)
    tracking_id: Mapped[Optional[str]] = mapped_column(String(64), index=True)

    sender_name: Mapped[Optional[str]] = mapped_column(String(255))
    sender_phone: Mapped[Optional[str]] = mapped_column(String(50))
    sender_region: Mapped[Optional[str]] = mapped_column(String(100))
    sender_district: Mapped[Optional[str]] = mapped_column(String(100))
    sender_address: Mapped[Optional[str]] = mapped_column(Text)

    receiver_name: Mapped[Optional[str]] = mapped_column(String(255))
    receiver_phone: Mapped[Optional[str]] = mapped_column(String(50))
    receiver_region: Mapped[Optional[str]] = mapped_column(String(100))
    receiver_district: Mapped[Optional[str]] = mapped_column(String(100))
    receiver_address: Mapped[Optional[str]] = mapped_column(Text)

    # ── Ownership (server-stamped) ────────────────────────────────────────
    created_by: Mapped[str] = mapped_column(String(320), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # ── Status ────────────────────────────────────────────────────────────
    payment_status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=PaymentStatus.UNPAID.value,
    )
    # Free-form: riders write their status verbatim
    delivery_status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=DeliveryStatus.PENDING.value,
    )

    # ── Assignment ────────────────────────────────────────────────────────
    assigned_rider_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid)
    assigned_rider_email: Mapped[Optional[str]] = mapped_column(String(320))
    assigned_rider_name: Mapped[Optional[str]] = mapped_column(String(255))
    assigned_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    picked_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    delivered_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    # ── Cashout ───────────────────────────────────────────────────────────
    cashout_status: Mapped[Optional[str]] = mapped_column(String(50))
    cashed_out_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    __table_args__ = (
        Index("idx_parcels_created_by_created_at", "created_by", "created_at"),
        Index("idx_parcels_rider_email", "assigned_rider_email", "delivery_status"),
    )

    def __repr__(self) -> str:
        return (
            f"<Parcel(id={self.id}, created_by='{self.created_by}', "
            f"delivery_status='{self.delivery_status}')>"
        )
