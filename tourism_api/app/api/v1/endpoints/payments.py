"""
Payment intent endpoint for API v1.

Creates a provider payment intent for a booking price and returns the
client secret.  The booking itself is updated separately once the
client has confirmed the payment (see ``PATCH /bookings/{id}/payment``).
"""

from fastapi import APIRouter, Depends, HTTPException, status

from tourism_api.app.core.errors import PaymentProviderError, ServiceError
from tourism_api.app.core.security import get_current_user
from tourism_api.app.schemas.payment import PaymentIntentCreate, PaymentIntentRead
from tourism_api.app.services.payment_service import PaymentService


router = APIRouter()


def get_payment_service() -> PaymentService:
    return PaymentService()


@router.post("/create-payment-intent", response_model=PaymentIntentRead)
async def create_payment_intent(
    body: PaymentIntentCreate,
    current_user: dict = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service),
) -> PaymentIntentRead:
    try:
        client_secret = await service.create_payment_intent(body.price)
    except PaymentProviderError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except ServiceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return PaymentIntentRead(client_secret=client_secret)
