"""
Parcel Server — Parcel Service
===============================

What:  Business rules for parcels: ownership-scoped listing, creation with
       server-stamped ownership, deletion, rider assignment, delivery status
       reporting, cashout and the status-count aggregation.
Who:   Called by routes/parcels.py; reads and writes through DocumentStore.

Design Decision:
    ParcelService is stateless. It receives the request's DocumentStore on
    every call, so all writes of one request land in one transaction:
    - assign_rider: parcel update + rider work_status update
    - update_delivery_status: parcel update + rider back to idle
    Either both writes commit or neither does.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from parcel_server.exceptions import NotFoundError
from parcel_server.models import Parcel
from parcel_server.models.enums import (
    ACTIVE_DELIVERY_STATUSES,
    COMPLETED_DELIVERY_STATUSES,
    CashoutStatus,
    DeliveryStatus,
    PaymentStatus,
    UserRole,
    WorkStatus,
)
from parcel_server.schemas.parcel import ParcelCreate, RiderAssignment, StatusCount
from parcel_server.services.provider_base import Identity
from parcel_server.store import DocumentStore, parse_object_id

logger = logging.getLogger(__name__)


class ParcelService:
    """Parcel operations; one method per parcel route."""

    async def list_parcels(
        self,
        store: DocumentStore,
        identity: Identity,
        caller_role: str,
        email: Optional[str] = None,
        payment_status: Optional[str] = None,
        delivery_status: Optional[str] = None,
    ) -> List[Parcel]:
        """
        List parcels newest first.

        Non-admin callers only ever see their own parcels: the creator filter
        is replaced by the caller's email whatever the query string said.
        """
        if caller_role != UserRole.ADMIN.value:
            email = identity.email
        elif email:
            email = email.strip().lower()

        return await store.parcels.find(
            created_by=email,
            payment_status=payment_status,
            delivery_status=delivery_status,
            order_by=Parcel.created_at.desc(),
        )

    async def get_parcel(self, store: DocumentStore, parcel_id: str) -> Parcel:
        """
        Raises:
            ValidationError: malformed id (400)
            NotFoundError: well-formed id, no parcel (404)
        """
        pid = parse_object_id(parcel_id, "parcel")
        parcel = await store.parcels.find_by_id(pid)
        if parcel is None:
            raise NotFoundError(resource="parcel", resource_id=parcel_id)
        return parcel

    async def create_parcel(
        self, store: DocumentStore, identity: Identity, data: ParcelCreate
    ) -> Parcel:
        parcel = Parcel(
            **data.model_dump(),
            created_by=identity.email,
            created_at=datetime.now(timezone.utc),
            payment_status=PaymentStatus.UNPAID.value,
            delivery_status=DeliveryStatus.PENDING.value,
        )
        await store.parcels.insert_one(parcel)
        logger.info("Parcel %s created by %s", parcel.id, identity.email)
        return parcel

    async def delete_parcel(
        self,
        store: DocumentStore,
        identity: Identity,
        caller_role: str,
        parcel_id: str,
    ) -> int:
        """Admins delete any parcel; other callers only parcels they created."""
        pid = parse_object_id(parcel_id, "parcel")
        criteria = []
        if caller_role != UserRole.ADMIN.value:
            criteria.append(Parcel.created_by == identity.email)

        deleted = await store.parcels.delete_by_id(pid, *criteria)
        if deleted == 0:
            raise NotFoundError(resource="parcel", resource_id=parcel_id)
        logger.info("Parcel %s deleted by %s", parcel_id, identity.email)
        return deleted

    async def assign_rider(
        self, store: DocumentStore, parcel_id: str, assignment: RiderAssignment
    ) -> int:
        """
        Put a parcel in the hands of a rider.

        Parcel: delivery_status='rider_assigned' + assignment fields.
        Rider:  work_status='in_delivery'.
        Assigning the same rider again rewrites the same values.
        Moving the parcel to another rider frees the previous one unless they
        still hold other active parcels.
        """
        pid = parse_object_id(parcel_id, "parcel")
        rid = parse_object_id(assignment.rider_id, "rider")

        rider = await store.riders.find_by_id(rid)
        if rider is None:
            raise NotFoundError(resource="rider", resource_id=assignment.rider_id)
        parcel = await store.parcels.find_by_id(pid)
        if parcel is None:
            raise NotFoundError(resource="parcel", resource_id=parcel_id)
        previous_rider_id = parcel.assigned_rider_id

        rider_email = assignment.rider_email or rider.email
        modified = await store.parcels.update_by_id(
            pid,
            {
                "delivery_status": DeliveryStatus.RIDER_ASSIGNED.value,
                "assigned_rider_id": rid,
                "assigned_rider_email": rider_email.strip().lower() if rider_email else None,
                "assigned_rider_name": assignment.rider_name or rider.name,
                "assigned_at": datetime.now(timezone.utc),
            },
        )
        if modified == 0:
            raise NotFoundError(resource="parcel", resource_id=parcel_id)

        await store.riders.update_by_id(rid, {"work_status": WorkStatus.IN_DELIVERY.value})
        if previous_rider_id is not None and previous_rider_id != rid:
            await self._release_rider_if_free(store, previous_rider_id)
        logger.info("Rider %s assigned to parcel %s", rid, pid)
        return modified

    async def update_delivery_status(
        self, store: DocumentStore, parcel_id: str, status: str
    ) -> int:
        """
        Write the rider-reported status verbatim.

        Side effects:
            in_transit → picked_at stamped
            delivered  → delivered_at stamped
            delivered / service_center_delivered → assigned rider back to idle
                once no active parcel is left on them
        """
        pid = parse_object_id(parcel_id, "parcel")
        now = datetime.now(timezone.utc)

        values = {"delivery_status": status}
        if status == DeliveryStatus.IN_TRANSIT.value:
            values["picked_at"] = now
        elif status == DeliveryStatus.DELIVERED.value:
            values["delivered_at"] = now

        modified = await store.parcels.update_by_id(pid, values)
        if modified == 0:
            raise NotFoundError(resource="parcel", resource_id=parcel_id)

        if status in COMPLETED_DELIVERY_STATUSES:
            parcel = await store.parcels.find_by_id(pid)
            if parcel is not None and parcel.assigned_rider_id is not None:
                await self._release_rider_if_free(store, parcel.assigned_rider_id)

        logger.info("Parcel %s delivery_status → %s", pid, status)
        return modified

    async def _release_rider_if_free(self, store: DocumentStore, rider_id: uuid.UUID) -> None:
        """Set a rider idle when no parcel in an active delivery status references them."""
        still_busy = await store.parcels.find_one(
            Parcel.delivery_status.in_(ACTIVE_DELIVERY_STATUSES),
            assigned_rider_id=rider_id,
        )
        if still_busy is None:
            await store.riders.update_by_id(rider_id, {"work_status": WorkStatus.IDLE.value})
            logger.info("Rider %s is idle", rider_id)

    async def cash_out(self, store: DocumentStore, parcel_id: str) -> int:
        pid = parse_object_id(parcel_id, "parcel")
        modified = await store.parcels.update_by_id(
            pid,
            {
                "cashout_status": CashoutStatus.CASHED_OUT.value,
                "cashed_out_at": datetime.now(timezone.utc),
            },
        )
        if modified == 0:
            raise NotFoundError(resource="parcel", resource_id=parcel_id)
        logger.info("Parcel %s cashed out", pid)
        return modified

    async def status_counts(self, store: DocumentStore) -> List[StatusCount]:
        counts = await store.parcels.count_by("delivery_status")
        return [StatusCount(status=status, count=count) for status, count in counts.items()]

    async def rider_parcels(
        self, store: DocumentStore, rider_email: str, completed: bool = False
    ) -> List[Parcel]:
        """Parcels assigned to a rider: in progress, or finished (newest delivery first)."""
        if completed:
            return await store.parcels.find(
                Parcel.delivery_status.in_(COMPLETED_DELIVERY_STATUSES),
                assigned_rider_email=rider_email,
                order_by=Parcel.delivered_at.desc(),
            )
        return await store.parcels.find(
            Parcel.delivery_status.in_(ACTIVE_DELIVERY_STATUSES),
            assigned_rider_email=rider_email,
            order_by=Parcel.assigned_at.desc(),
        )


parcel_service = ParcelService()
