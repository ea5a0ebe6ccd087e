"""
Parcel Server — Payment Service
================================

What:  Bridges the payment processor and the payment audit log.

Record-payment flow (POST /payments):
    1. Validate the parcel id
    2. UPDATE parcels SET payment_status='paid'
       WHERE id = :id AND payment_status != 'paid'
    3. Zero rows → parcel missing or already paid → 404, nothing inserted
    4. INSERT the payment record

Steps 2 and 4 share the request transaction: a failed insert rolls the
status change back, so a parcel is never "paid" without its record.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from parcel_server.exceptions import NotFoundError
from parcel_server.models import Parcel, Payment
from parcel_server.models.enums import PaymentStatus, UserRole
from parcel_server.schemas.payment import PaymentCreate
from parcel_server.services.provider_base import Identity, PaymentProvider
from parcel_server.services.stripe_service import stripe_payment_provider
from parcel_server.store import DocumentStore, parse_object_id

logger = logging.getLogger(__name__)


def get_payment_provider() -> PaymentProvider:
    """Dependency returning the configured payment provider (overridable in tests)."""
    return stripe_payment_provider


class PaymentService:

    async def create_intent(self, provider: PaymentProvider, amount_in_cents: int) -> str:
        return await provider.create_payment_intent(amount_in_cents)

    async def record_payment(
        self, store: DocumentStore, identity: Identity, data: PaymentCreate
    ) -> Payment:
        pid = parse_object_id(data.parcel_id, "parcel")

        modified = await store.parcels.update_one(
            Parcel.id == pid,
            Parcel.payment_status != PaymentStatus.PAID.value,
            values={"payment_status": PaymentStatus.PAID.value},
        )
        if modified == 0:
            raise NotFoundError(
                resource="parcel",
                resource_id=data.parcel_id,
                message="Parcel not found or already paid",
            )

        payment = Payment(
            parcel_id=pid,
            email=identity.email,
            amount=data.amount,
            payment_method=data.payment_method,
            transaction_id=data.transaction_id,
            paid_at=datetime.now(timezone.utc),
        )
        await store.payments.insert_one(payment)
        logger.info("Payment %s recorded for parcel %s", payment.id, pid)
        return payment

    async def list_payments(
        self,
        store: DocumentStore,
        identity: Identity,
        caller_role: str,
        email: Optional[str] = None,
    ) -> List[Payment]:
        """Newest first; non-admin callers only see their own payments."""
        if caller_role != UserRole.ADMIN.value:
            email = identity.email
        elif email:
            email = email.strip().lower()
        return await store.payments.find(email=email, order_by=Payment.paid_at.desc())


payment_service = PaymentService()
