"""
Parcel Server — Tracking Route Handlers
========================================

Public parcel tracking: anyone holding a tracking id may read its history,
and the tracking log is appended to by the admin console and rider app.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from parcel_server.schemas.common import InsertedResponse
from parcel_server.schemas.tracking import TrackingCreate, TrackingEventResponse
from parcel_server.services.tracking_service import tracking_service
from parcel_server.store import DocumentStore, get_store

router = APIRouter(prefix="/trackings", tags=["Trackings"])


@router.post(
    "",
    response_model=InsertedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Append a tracking event",
)
async def add_tracking_event(
    body: TrackingCreate,
    store: DocumentStore = Depends(get_store),
) -> InsertedResponse:
    event = await tracking_service.add_event(store, body)
    return InsertedResponse(message="Tracking event added", inserted_id=event.id)


@router.get(
    "/{tracking_id}",
    response_model=List[TrackingEventResponse],
    summary="Tracking history, oldest first",
)
async def list_tracking_events(
    tracking_id: str,
    store: DocumentStore = Depends(get_store),
) -> List[TrackingEventResponse]:
    events = await tracking_service.list_events(store, tracking_id)
    return [TrackingEventResponse.model_validate(e) for e in events]
