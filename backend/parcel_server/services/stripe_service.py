"""
Parcel Server — Stripe Payment Provider
========================================

What:  Creates Stripe PaymentIntents and returns their client secret.
Why:   The browser confirms the card payment directly with Stripe using the
       secret; the server only ever sees the amount and the resulting
       transaction id (recorded later through POST /payments).
How:   stripe-python is synchronous, so each call runs in Starlette's
       threadpool. Connection-level failures are retried by tenacity with
       exponential backoff + jitter. Every attempt reuses one idempotency key,
       so a retry after a lost response cannot mint a second intent.

Error handling:
    APIConnectionError  → retried, then PaymentProcessorError
    Any other StripeError (card declined, invalid amount, bad API key)
                        → PaymentProcessorError immediately, Stripe's message kept
"""

import logging
import uuid

import stripe
from starlette.concurrency import run_in_threadpool
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from parcel_server.config import settings
from parcel_server.exceptions import PaymentProcessorError
from parcel_server.services.provider_base import PaymentProvider

logger = logging.getLogger(__name__)


class StripePaymentProvider(PaymentProvider):
    """Stripe-backed implementation of PaymentProvider."""

    PAYMENT_METHOD_TYPES = ["card"]

    async def create_payment_intent(self, amount_in_cents: int) -> str:
        idempotency_key = str(uuid.uuid4())
        try:
            intent = await self._create_intent_with_retry(amount_in_cents, idempotency_key)
        except stripe.StripeError as e:
            message = getattr(e, "user_message", None) or str(e) or "Payment processor request failed"
            logger.error(
                "Stripe PaymentIntent creation failed (%s): %s",
                type(e).__name__,
                message,
            )
            raise PaymentProcessorError(
                message=message,
                context={"error_type": type(e).__name__, "idempotency_key": idempotency_key},
            )

        logger.info("Created PaymentIntent %s for %d cents", intent.id, amount_in_cents)
        return intent.client_secret

    @retry(
        retry=retry_if_exception_type(stripe.APIConnectionError),
        stop=stop_after_attempt(settings.retry_max_attempts),
        wait=wait_exponential_jitter(
            initial=settings.retry_min_wait,
            max=settings.retry_max_wait,
            jitter=1,
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def _create_intent_with_retry(self, amount_in_cents: int, idempotency_key: str):
        return await run_in_threadpool(
            stripe.PaymentIntent.create,
            api_key=settings.stripe_secret_key,
            amount=amount_in_cents,
            currency=settings.payment_currency,
            payment_method_types=self.PAYMENT_METHOD_TYPES,
            idempotency_key=idempotency_key,
        )


stripe_payment_provider = StripePaymentProvider()
