"""
Parcel Server — External Provider Unit Tests
=============================================

What we test:
    ✅ StripePaymentProvider sends amount, currency, card method and an
       idempotency key, and returns the client secret
    ✅ Stripe errors become PaymentProcessorError with Stripe's message
    ✅ Connection errors are retried with the same idempotency key
    ✅ FirebaseIdentityProvider maps claims to Identity and rejects bad tokens
"""

from unittest.mock import MagicMock, patch

import pytest
import stripe
from tenacity import wait_none

from parcel_server.exceptions import ForbiddenError, PaymentProcessorError
from parcel_server.services.firebase_service import FirebaseIdentityProvider
from parcel_server.services.stripe_service import StripePaymentProvider


def _intent(secret: str = "pi_1_secret_2"):
    intent = MagicMock()
    intent.id = "pi_1"
    intent.client_secret = secret
    return intent


class TestStripePaymentProvider:

    def setup_method(self):
        self.provider = StripePaymentProvider()

    @pytest.mark.asyncio
    async def test_creates_card_intent(self):
        with patch("stripe.PaymentIntent.create", return_value=_intent()) as mock_create:
            secret = await self.provider.create_payment_intent(2500)

        assert secret == "pi_1_secret_2"
        kwargs = mock_create.call_args.kwargs
        assert kwargs["amount"] == 2500
        assert kwargs["currency"] == "usd"
        assert kwargs["payment_method_types"] == ["card"]
        assert kwargs["idempotency_key"]

    @pytest.mark.asyncio
    async def test_stripe_error_keeps_message(self):
        error = stripe.InvalidRequestError("Amount must be at least $0.50 usd", param="amount")
        with patch("stripe.PaymentIntent.create", side_effect=error) as mock_create:
            with pytest.raises(PaymentProcessorError) as exc_info:
                await self.provider.create_payment_intent(10)

        assert exc_info.value.message == "Amount must be at least $0.50 usd"
        mock_create.assert_called_once()

    @pytest.mark.asyncio
    async def test_connection_error_is_retried_with_same_key(self):
        retrying = StripePaymentProvider._create_intent_with_retry.retry
        side_effect = [stripe.APIConnectionError("network down"), _intent()]
        with patch.object(retrying, "wait", wait_none()), \
             patch("stripe.PaymentIntent.create", side_effect=side_effect) as mock_create:
            secret = await self.provider.create_payment_intent(2500)

        assert secret == "pi_1_secret_2"
        assert mock_create.call_count == 2
        keys = {call.kwargs["idempotency_key"] for call in mock_create.call_args_list}
        assert len(keys) == 1

    @pytest.mark.asyncio
    async def test_persistent_connection_error_surfaces(self):
        retrying = StripePaymentProvider._create_intent_with_retry.retry
        with patch.object(retrying, "wait", wait_none()), \
             patch("stripe.PaymentIntent.create", side_effect=stripe.APIConnectionError("down")) as mock_create:
            with pytest.raises(PaymentProcessorError):
                await self.provider.create_payment_intent(2500)

        assert mock_create.call_count == 3


class TestFirebaseIdentityProvider:

    def setup_method(self):
        self.provider = FirebaseIdentityProvider()
        # Skip real credential loading
        self.provider._app = MagicMock()

    @pytest.mark.asyncio
    async def test_claims_become_identity(self):
        with patch("parcel_server.services.firebase_service.firebase_auth") as mock_auth:
            mock_auth.verify_id_token.return_value = {"uid": "u-1", "email": "Alice@Example.com"}
            identity = await self.provider.verify_token("id-token")

        assert identity.uid == "u-1"
        assert identity.email == "alice@example.com"
        mock_auth.verify_id_token.assert_called_once_with("id-token", app=self.provider._app)

    @pytest.mark.asyncio
    async def test_rejected_token_is_forbidden(self):
        with patch("parcel_server.services.firebase_service.firebase_auth") as mock_auth:
            mock_auth.verify_id_token.side_effect = ValueError("Illegal ID token")
            with pytest.raises(ForbiddenError):
                await self.provider.verify_token("garbage")

    @pytest.mark.asyncio
    async def test_token_without_email_is_forbidden(self):
        with patch("parcel_server.services.firebase_service.firebase_auth") as mock_auth:
            mock_auth.verify_id_token.return_value = {"uid": "u-2"}
            with pytest.raises(ForbiddenError):
                await self.provider.verify_token("phone-only-user")
