"""
Pydantic models for payment intents.

The client asks for an intent with the booking price and receives the
provider's client secret, which it uses to confirm the card payment
directly with the provider.
"""

from pydantic import BaseModel, Field


class PaymentIntentCreate(BaseModel):
    price: float = Field(..., allow_inf_nan=False, examples=[250.0])


class PaymentIntentRead(BaseModel):
    client_secret: str
