"""
Parcel Server — Tracking Event SQLAlchemy Model
================================================

What:  Append-only log entry for a parcel's public tracking history.
How:   Keyed by the parcel's tracking_id (not its document id) so the
       public tracking page never needs the internal identifier.
Replay order: timestamp ascending.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from parcel_server.database import Base


class TrackingEvent(Base):
    __tablename__ = "trackings"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    tracking_id: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False)
    message: Mapped[Optional[str]] = mapped_column(Text)
    update_by: Mapped[Optional[str]] = mapped_column(String(320))
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_trackings_tracking_id_timestamp", "tracking_id", "timestamp"),
    )

    def __repr__(self) -> str:
        return f"<TrackingEvent(tracking_id='{self.tracking_id}', status='{self.status}')>"
