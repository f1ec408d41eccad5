"""
Payment intent creation.

The API never handles card data.  ``PaymentService`` asks the payment
provider (Stripe PaymentIntents) for an intent covering the booking
price and hands the client secret back to the frontend, which then
confirms the payment with the provider directly.  Once that succeeds
the frontend reports the transaction id through
``PATCH /bookings/{id}/payment``; payment completion is not verified
server‑side.
"""

import logging
import math
from typing import Any, Dict, Sequence

import httpx

from ..core.config import settings
from ..core.errors import PaymentProviderError, ServiceError


logger = logging.getLogger(__name__)


class PaymentService:
    """Thin client for the provider's payment‑intent endpoint."""

    def __init__(
        self,
        secret_key: str | None = None,
        api_base: str | None = None,
        currency: str | None = None,
        payment_methods: Sequence[str] = ("card",),
    ):
        self.secret_key = secret_key if secret_key is not None else settings.stripe_secret_key
        self.api_base = (api_base or settings.stripe_api_base).rstrip("/")
        self.currency = currency or settings.payment_currency
        self.payment_methods = list(payment_methods)

    @staticmethod
    def to_minor_units(price: float) -> int:
        """Convert a decimal price into integer minor units (cents)."""
        return int(round(price * 100))

    async def create_payment_intent(self, price: float) -> str:
        """Create an intent for ``price`` and return its client secret.

        Raises ``ServiceError`` for a non‑positive price and
        ``PaymentProviderError`` when the provider rejects the request
        or cannot be reached.  The request is attempted once.
        """
        if not math.isfinite(price):
            raise ServiceError("price must be a finite number")
        amount = self.to_minor_units(price)
        if amount <= 0:
            raise ServiceError("price must be greater than zero")
        if not self.secret_key:
            logger.error("Payment intent requested but STRIPE_SECRET_KEY is not configured")
            raise PaymentProviderError("payment provider is not configured")
        form: Dict[str, Any] = {
            "amount": amount,
            "currency": self.currency,
            "payment_method_types[]": self.payment_methods,
        }
        try:
            data = await self._post("/payment_intents", form)
        except httpx.HTTPError as exc:
            logger.error("Failed to create payment intent for %s %s: %s", amount, self.currency, exc)
            raise PaymentProviderError("payment provider unavailable") from exc
        client_secret = data.get("client_secret")
        if not client_secret:
            logger.error("Payment provider response without client_secret: %s", data.get("id"))
            raise PaymentProviderError("payment provider returned no client secret")
        logger.info("Payment intent %s created for %s %s", data.get("id"), amount, self.currency)
        return client_secret

    async def _post(self, path: str, form: Dict[str, Any]) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=30) as client:
            response = await client.post(
                f"{self.api_base}{path}",
                data=form,
                headers={"Authorization": f"Bearer {self.secret_key}"},
            )
            response.raise_for_status()
            return response.json()
