"""
Parcel Server — Payment Schemas
================================

Payment intents are sized in the smallest currency unit (cents for USD).
The frontend historically posts `amountInCents`, so both spellings are accepted.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PaymentIntentRequest(BaseModel):
    amount_in_cents: int = Field(
        alias="amountInCents",
        gt=0,
        description="Amount to charge in the smallest currency unit",
    )

    model_config = {"populate_by_name": True}


class PaymentIntentResponse(BaseModel):
    client_secret: str = Field(
        alias="clientSecret",
        description="Secret the browser uses to confirm the payment",
    )

    model_config = {"populate_by_name": True}


class PaymentCreate(BaseModel):
    """Body of POST /payments, sent after the browser confirmed the intent."""
    parcel_id: str
    amount: float = Field(ge=0)
    payment_method: Optional[str] = Field(default=None, max_length=50)
    transaction_id: Optional[str] = Field(default=None, max_length=255)

    # email and paid_at are server-stamped
    model_config = {"extra": "ignore"}


class PaymentResponse(BaseModel):
    id: uuid.UUID
    parcel_id: uuid.UUID
    email: str
    amount: float
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    paid_at: datetime

    model_config = {"from_attributes": True}
