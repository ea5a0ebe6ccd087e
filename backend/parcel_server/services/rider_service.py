"""
Parcel Server — Rider Service
==============================

What:  Rider applications, availability lookups and admin status decisions.
Who:   Called by routes/riders.py.

Activation side effect:
    Setting a rider to 'active' with an email promotes that user's role to
    'rider' in the same request transaction, so the rider document and the
    user role cannot disagree after a failure.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from parcel_server.exceptions import NotFoundError, ValidationError
from parcel_server.models import Rider
from parcel_server.models.enums import RiderStatus, UserRole, WorkStatus
from parcel_server.schemas.rider import RiderCreate, RiderStatusUpdate
from parcel_server.services.provider_base import Identity
from parcel_server.store import DocumentStore, parse_object_id

logger = logging.getLogger(__name__)


class RiderService:

    async def register(
        self, store: DocumentStore, identity: Identity, data: RiderCreate
    ) -> Rider:
        """Store a rider application. Repeated applications are all kept."""
        fields = data.model_dump()
        email = fields.pop("email") or identity.email
        rider = Rider(
            **fields,
            email=email.strip().lower(),
            status=RiderStatus.PENDING.value,
            work_status=WorkStatus.IDLE.value,
            created_at=datetime.now(timezone.utc),
        )
        await store.riders.insert_one(rider)
        logger.info("Rider application %s from %s", rider.id, rider.email)
        return rider

    async def available(self, store: DocumentStore, district: Optional[str]) -> List[Rider]:
        # Only the district narrows the list; status is not filtered.
        return await store.riders.find(district=district, order_by=Rider.created_at)

    async def by_status(self, store: DocumentStore, status: RiderStatus) -> List[Rider]:
        return await store.riders.find(status=status.value, order_by=Rider.created_at.desc())

    async def update_status(
        self, store: DocumentStore, rider_id: str, data: RiderStatusUpdate
    ) -> Tuple[int, bool]:
        """
        Returns:
            (modified, promoted): riders updated, and whether a user was
            promoted to the rider role.
        """
        allowed = [s.value for s in RiderStatus]
        if data.status not in allowed:
            raise ValidationError(
                message=f"Invalid rider status '{data.status}'. Allowed: {', '.join(allowed)}",
                field="status",
            )
        rid = parse_object_id(rider_id, "rider")

        modified = await store.riders.update_by_id(rid, {"status": data.status})
        if modified == 0:
            raise NotFoundError(resource="rider", resource_id=rider_id)
        logger.info("Rider %s status → %s", rid, data.status)

        if data.status == RiderStatus.ACTIVE.value and data.email:
            promoted = await store.users.update_one(
                values={"role": UserRole.RIDER.value},
                email=data.email.strip().lower(),
            )
            if promoted:
                logger.info("User %s promoted to rider", data.email)
            return modified, promoted > 0
        return modified, False


rider_service = RiderService()
