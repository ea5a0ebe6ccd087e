"""
Parcel Server — Payment Route Handlers
=======================================

What:  The checkout bridge to the payment processor and the payment log.

Checkout sequence (browser-driven):
    1. POST /create-payment-intent {amount_in_cents}  → {clientSecret}
    2. Browser confirms the card payment with the processor
    3. POST /payments {parcel_id, amount, ...}         → parcel marked paid + record

Step 3 is refused with 404 when the parcel is missing or already paid, so a
double submit never creates a second payment record.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from parcel_server.auth import get_caller_role, verify_token
from parcel_server.schemas.common import ErrorResponse, InsertedResponse
from parcel_server.schemas.payment import (
    PaymentCreate,
    PaymentIntentRequest,
    PaymentIntentResponse,
    PaymentResponse,
)
from parcel_server.services.payment_service import get_payment_provider, payment_service
from parcel_server.services.provider_base import Identity, PaymentProvider
from parcel_server.store import DocumentStore, get_store

router = APIRouter(tags=["Payments"])


@router.post(
    "/create-payment-intent",
    response_model=PaymentIntentResponse,
    responses={500: {"description": "Payment processor error", "model": ErrorResponse}},
    summary="Create a card payment intent",
)
async def create_payment_intent(
    body: PaymentIntentRequest,
    provider: PaymentProvider = Depends(get_payment_provider),
) -> PaymentIntentResponse:
    client_secret = await payment_service.create_intent(provider, body.amount_in_cents)
    return PaymentIntentResponse(client_secret=client_secret)


@router.post(
    "/payments",
    response_model=InsertedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Malformed parcel id", "model": ErrorResponse},
        404: {"description": "Parcel not found or already paid", "model": ErrorResponse},
    },
    summary="Record a confirmed payment",
)
async def record_payment(
    body: PaymentCreate,
    identity: Identity = Depends(verify_token),
    store: DocumentStore = Depends(get_store),
) -> InsertedResponse:
    payment = await payment_service.record_payment(store, identity, body)
    return InsertedResponse(message="Payment recorded", inserted_id=payment.id)


@router.get(
    "/payments",
    response_model=List[PaymentResponse],
    summary="Payment history, newest first",
)
async def list_payments(
    email: Optional[str] = Query(default=None, description="Payer email (admins only)"),
    identity: Identity = Depends(verify_token),
    store: DocumentStore = Depends(get_store),
) -> List[PaymentResponse]:
    caller_role = await get_caller_role(identity, store)
    payments = await payment_service.list_payments(store, identity, caller_role, email)
    return [PaymentResponse.model_validate(p) for p in payments]
