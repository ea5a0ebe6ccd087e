"""
Parcel Server — Parcel Route Handlers
======================================

What:  /parcels CRUD, rider assignment, delivery status, cashout, the status
       aggregation and the rider dashboards under /rider.
How:   Resolve the caller (verify_token / require_admin / require_rider),
       delegate to ParcelService, wrap the result in a response schema.
Who:   Called by the customer dashboard, the admin console and the rider app.

Access summary:
    GET    /parcels                         bearer (non-admins see own parcels)
    GET    /parcels/{id}                    public
    POST   /parcels                         bearer
    DELETE /parcels/{id}                    bearer (admin any, others own)
    PATCH  /parcels/{id}/assign             admin
    PATCH  /parcels/{id}/status             rider
    PATCH  /parcels/{id}/cashout            bearer
    GET    /parcels/delivery/status-count   public
    GET    /rider/parcels                   rider
    GET    /rider/completed-parcels         rider
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from parcel_server.auth import get_caller_role, require_admin, require_rider, verify_token
from parcel_server.schemas.common import (
    DeletedResponse,
    ErrorResponse,
    InsertedResponse,
    UpdatedResponse,
)
from parcel_server.schemas.parcel import (
    DeliveryStatusUpdate,
    ParcelCreate,
    ParcelResponse,
    RiderAssignment,
    StatusCount,
)
from parcel_server.services.parcel_service import parcel_service
from parcel_server.services.provider_base import Identity
from parcel_server.store import DocumentStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Parcels"])

_errors = {
    400: {"description": "Malformed id or body", "model": ErrorResponse},
    404: {"description": "Parcel not found", "model": ErrorResponse},
}


@router.get(
    "/parcels",
    response_model=List[ParcelResponse],
    summary="List parcels, newest first",
)
async def list_parcels(
    email: Optional[str] = Query(default=None, description="Creator email (admins only)"),
    payment_status: Optional[str] = Query(default=None),
    delivery_status: Optional[str] = Query(default=None),
    identity: Identity = Depends(verify_token),
    store: DocumentStore = Depends(get_store),
) -> List[ParcelResponse]:
    """
    Non-admin callers get their own parcels regardless of `email`.
    The other filters are plain equality matches and may be combined.
    """
    caller_role = await get_caller_role(identity, store)
    parcels = await parcel_service.list_parcels(
        store,
        identity,
        caller_role,
        email=email,
        payment_status=payment_status,
        delivery_status=delivery_status,
    )
    return [ParcelResponse.model_validate(p) for p in parcels]


@router.get(
    "/parcels/delivery/status-count",
    response_model=List[StatusCount],
    summary="Count parcels per delivery status",
)
async def delivery_status_count(
    store: DocumentStore = Depends(get_store),
) -> List[StatusCount]:
    return await parcel_service.status_counts(store)


@router.get(
    "/parcels/{parcel_id}",
    response_model=ParcelResponse,
    responses=_errors,
    summary="Get a single parcel",
)
async def get_parcel(
    parcel_id: str,
    store: DocumentStore = Depends(get_store),
) -> ParcelResponse:
    parcel = await parcel_service.get_parcel(store, parcel_id)
    return ParcelResponse.model_validate(parcel)


@router.post(
    "/parcels",
    response_model=InsertedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a parcel owned by the caller",
)
async def create_parcel(
    body: ParcelCreate,
    identity: Identity = Depends(verify_token),
    store: DocumentStore = Depends(get_store),
) -> InsertedResponse:
    parcel = await parcel_service.create_parcel(store, identity, body)
    return InsertedResponse(message="Parcel created", inserted_id=parcel.id)


@router.delete(
    "/parcels/{parcel_id}",
    response_model=DeletedResponse,
    responses=_errors,
    summary="Delete a parcel",
)
async def delete_parcel(
    parcel_id: str,
    identity: Identity = Depends(verify_token),
    store: DocumentStore = Depends(get_store),
) -> DeletedResponse:
    caller_role = await get_caller_role(identity, store)
    deleted = await parcel_service.delete_parcel(store, identity, caller_role, parcel_id)
    return DeletedResponse(message="Parcel deleted", deleted_count=deleted)


@router.patch(
    "/parcels/{parcel_id}/assign",
    response_model=UpdatedResponse,
    responses=_errors,
    summary="Assign a rider to a parcel (admin)",
)
async def assign_rider(
    parcel_id: str,
    body: RiderAssignment,
    _admin: Identity = Depends(require_admin),
    store: DocumentStore = Depends(get_store),
) -> UpdatedResponse:
    modified = await parcel_service.assign_rider(store, parcel_id, body)
    return UpdatedResponse(message="Rider assigned", modified_count=modified)


@router.patch(
    "/parcels/{parcel_id}/status",
    response_model=UpdatedResponse,
    responses=_errors,
    summary="Report delivery progress (rider)",
)
async def update_delivery_status(
    parcel_id: str,
    body: DeliveryStatusUpdate,
    _rider: Identity = Depends(require_rider),
    store: DocumentStore = Depends(get_store),
) -> UpdatedResponse:
    modified = await parcel_service.update_delivery_status(store, parcel_id, body.status)
    return UpdatedResponse(message="Delivery status updated", modified_count=modified)


@router.patch(
    "/parcels/{parcel_id}/cashout",
    response_model=UpdatedResponse,
    responses=_errors,
    summary="Mark a parcel as cashed out",
)
async def cash_out(
    parcel_id: str,
    _identity: Identity = Depends(verify_token),
    store: DocumentStore = Depends(get_store),
) -> UpdatedResponse:
    modified = await parcel_service.cash_out(store, parcel_id)
    return UpdatedResponse(message="Parcel cashed out", modified_count=modified)


# ── Rider dashboards ──────────────────────────────────────────────────────

@router.get(
    "/rider/parcels",
    response_model=List[ParcelResponse],
    summary="Parcels currently assigned to the calling rider",
)
async def rider_active_parcels(
    rider: Identity = Depends(require_rider),
    store: DocumentStore = Depends(get_store),
) -> List[ParcelResponse]:
    parcels = await parcel_service.rider_parcels(store, rider.email)
    return [ParcelResponse.model_validate(p) for p in parcels]


@router.get(
    "/rider/completed-parcels",
    response_model=List[ParcelResponse],
    summary="Parcels the calling rider has delivered",
)
async def rider_completed_parcels(
    rider: Identity = Depends(require_rider),
    store: DocumentStore = Depends(get_store),
) -> List[ParcelResponse]:
    parcels = await parcel_service.rider_parcels(store, rider.email, completed=True)
    return [ParcelResponse.model_validate(p) for p in parcels]
