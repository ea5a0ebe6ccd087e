"""
Parcel Server — Rider Route Handlers
=====================================

    POST  /riders                       bearer  (application, status=pending)
    GET   /riders/available?district=   bearer
    GET   /riders/pending               admin
    GET   /riders/active                admin
    PATCH /riders/{id}/status           admin   (active + email → user promoted)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from parcel_server.auth import require_admin, verify_token
from parcel_server.models.enums import RiderStatus
from parcel_server.schemas.common import ErrorResponse, InsertedResponse, UpdatedResponse
from parcel_server.schemas.rider import RiderCreate, RiderResponse, RiderStatusUpdate
from parcel_server.services.provider_base import Identity
from parcel_server.services.rider_service import rider_service
from parcel_server.store import DocumentStore, get_store

router = APIRouter(prefix="/riders", tags=["Riders"])


@router.post(
    "",
    response_model=InsertedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Apply to become a rider",
)
async def register_rider(
    body: RiderCreate,
    identity: Identity = Depends(verify_token),
    store: DocumentStore = Depends(get_store),
) -> InsertedResponse:
    rider = await rider_service.register(store, identity, body)
    return InsertedResponse(message="Rider application submitted", inserted_id=rider.id)


@router.get(
    "/available",
    response_model=List[RiderResponse],
    summary="Riders in a district",
)
async def available_riders(
    district: Optional[str] = Query(default=None),
    _identity: Identity = Depends(verify_token),
    store: DocumentStore = Depends(get_store),
) -> List[RiderResponse]:
    riders = await rider_service.available(store, district)
    return [RiderResponse.model_validate(r) for r in riders]


@router.get(
    "/pending",
    response_model=List[RiderResponse],
    summary="Rider applications awaiting review (admin)",
)
async def pending_riders(
    _admin: Identity = Depends(require_admin),
    store: DocumentStore = Depends(get_store),
) -> List[RiderResponse]:
    riders = await rider_service.by_status(store, RiderStatus.PENDING)
    return [RiderResponse.model_validate(r) for r in riders]


@router.get(
    "/active",
    response_model=List[RiderResponse],
    summary="Active riders (admin)",
)
async def active_riders(
    _admin: Identity = Depends(require_admin),
    store: DocumentStore = Depends(get_store),
) -> List[RiderResponse]:
    riders = await rider_service.by_status(store, RiderStatus.ACTIVE)
    return [RiderResponse.model_validate(r) for r in riders]


@router.patch(
    "/{rider_id}/status",
    response_model=UpdatedResponse,
    responses={
        400: {"description": "Malformed id or unknown status", "model": ErrorResponse},
        404: {"description": "No such rider", "model": ErrorResponse},
    },
    summary="Approve or activate a rider (admin)",
)
async def update_rider_status(
    rider_id: str,
    body: RiderStatusUpdate,
    _admin: Identity = Depends(require_admin),
    store: DocumentStore = Depends(get_store),
) -> UpdatedResponse:
    modified, promoted = await rider_service.update_status(store, rider_id, body)
    message = f"Rider status updated to {body.status}"
    if promoted:
        message += "; user promoted to rider"
    return UpdatedResponse(message=message, modified_count=modified)
