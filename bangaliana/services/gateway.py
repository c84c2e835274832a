"""Stripe boundary: turn an amount in minor units into a PaymentIntent client secret."""

import stripe
from fastapi.concurrency import run_in_threadpool

from bangaliana.core.config import get_settings
from bangaliana.core.exceptions import GatewayError
from bangaliana.core.logging import get_logger

log = get_logger(__name__)


class StripeGateway:
    def __init__(self, api_key: str):
        self._api_key = api_key

    def _create(self, amount: int, currency: str):
        return stripe.PaymentIntent.create(
            amount=amount,
            currency=currency,
            payment_method_types=["card"],
            api_key=self._api_key,
        )

    async def create_intent(self, amount: int, currency: str) -> str:
        if not self._api_key:
            raise GatewayError("Payments not configured")
        try:
            intent = await run_in_threadpool(self._create, amount, currency)
        except stripe.StripeError as e:
            log.warning("gateway_error", amount=amount, currency=currency, error=str(e))
            raise GatewayError("Payment provider rejected the request", details={"provider_message": str(e)}) from e
        secret = getattr(intent, "client_secret", None)
        if not secret:
            raise GatewayError("Payment provider returned no client secret")
        log.info("payment_intent_created", intent_id=getattr(intent, "id", None), amount=amount, currency=currency)
        return secret


def get_payment_gateway() -> StripeGateway:
    return StripeGateway(get_settings().stripe_secret_key)
