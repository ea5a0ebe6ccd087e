"""
Parcel Server — External Provider Interfaces
=============================================

What:  Abstract contracts for the two SaaS integrations.
Why:   Route handlers and auth depend on these interfaces, never on an SDK.
       Tests swap in fakes through FastAPI dependency overrides; production
       wires FirebaseIdentityProvider and StripePaymentProvider.

Implementations:
    - IdentityProvider → FirebaseIdentityProvider (firebase_service.py)
    - PaymentProvider  → StripePaymentProvider (stripe_service.py)
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class Identity(BaseModel):
    """Decoded caller identity attached to an authenticated request."""
    uid: Optional[str] = Field(default=None, description="Identity provider user id")
    email: str = Field(description="Verified email claim (lower-cased)")
    claims: Dict[str, Any] = Field(default_factory=dict)


class IdentityProvider(ABC):
    """
    Verifies bearer ID tokens.

    Contract:
        - verify_token() returns an Identity with a non-empty email
        - Any rejection (bad signature, expired, revoked, no email claim)
          raises ForbiddenError
    """

    @abstractmethod
    async def verify_token(self, token: str) -> Identity:
        ...


class PaymentProvider(ABC):
    """
    Creates payment intents with an external payment processor.

    Contract:
        - create_payment_intent() returns the client secret the browser
          uses to confirm the payment
        - Processor failures raise PaymentProcessorError carrying the
          processor's message
    """

    @abstractmethod
    async def create_payment_intent(self, amount_in_cents: int) -> str:
        ...
