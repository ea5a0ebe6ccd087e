"""
Parcel Server — Tracking Service
=================================

Append-only tracking log. Events are never updated or deduplicated; the
public tracking page replays them oldest first.
"""

import logging
from datetime import datetime, timezone
from typing import List

from parcel_server.models import TrackingEvent
from parcel_server.schemas.tracking import TrackingCreate
from parcel_server.store import DocumentStore

logger = logging.getLogger(__name__)


class TrackingService:

    async def add_event(self, store: DocumentStore, data: TrackingCreate) -> TrackingEvent:
        event = TrackingEvent(
            tracking_id=data.tracking_id,
            status=data.status,
            message=data.message,
            update_by=data.update_by,
            timestamp=datetime.now(timezone.utc),
        )
        await store.trackings.insert_one(event)
        logger.info("Tracking %s: %s", data.tracking_id, data.status)
        return event

    async def list_events(self, store: DocumentStore, tracking_id: str) -> List[TrackingEvent]:
        return await store.trackings.find(
            tracking_id=tracking_id,
            order_by=TrackingEvent.timestamp.asc(),
        )


tracking_service = TrackingService()
