from decimal import Decimal

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from bangaliana.core.config import get_settings
from bangaliana.services import payments as payments_service
from bangaliana.services.gateway import StripeGateway, get_payment_gateway

router = APIRouter()


class PaymentIntentRequest(BaseModel):
    price: Decimal  # major units, e.g. 19.99


@router.post("/create-payment-intent")
async def create_payment_intent(
    body: PaymentIntentRequest,
    gateway: StripeGateway = Depends(get_payment_gateway),
):
    """Create a Stripe PaymentIntent for price * 100 and return only its client secret."""
    secret = await payments_service.create_payment_intent(
        body.price, get_settings().payment_currency, gateway
    )
    return {"clientSecret": secret}
