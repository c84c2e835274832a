"""Payment intents and confirmation: record the payment, then mark the order paid."""

from datetime import datetime
from decimal import Decimal

from beanie import PydanticObjectId
from beanie.odm.operators.update.general import Set

from bangaliana.core.audit import log_event
from bangaliana.core.exceptions import BadRequestError, ConflictError
from bangaliana.core.logging import get_logger
from bangaliana.models.order import Order
from bangaliana.models.payment import Payment
from bangaliana.services import orders as orders_service
from bangaliana.services.gateway import StripeGateway

log = get_logger(__name__)


def to_minor_units(price: Decimal) -> int:
    """price * 100, exact; refuses fractions of a cent rather than rounding them."""
    if price <= 0:
        raise BadRequestError("Price must be positive")
    amount = price * 100
    if amount != amount.to_integral_value():
        raise BadRequestError("Price has more than two decimal places")
    return int(amount)


async def create_payment_intent(price: Decimal, currency: str, gateway: StripeGateway) -> str:
    return await gateway.create_intent(to_minor_units(price), currency)


def _str_or_none(value) -> str | None:
    return value if isinstance(value, str) else None


def confirmation_body(order: Order) -> dict:
    return {"paid": True, "transactionId": order.transaction_id}


def _already_paid(order: Order, transaction_id: str) -> dict:
    if order.transaction_id == transaction_id:
        log.info("payment_confirm_replayed", order_id=str(order.id), transaction_id=transaction_id)
        return confirmation_body(order)
    raise ConflictError(
        "Order already paid",
        details={"transactionId": order.transaction_id},
    )


async def _compensate(payment: Payment, order_id: PydanticObjectId, transaction_id: str) -> None:
    """Remove a payment whose order could not be marked paid."""
    try:
        await payment.delete()
    except Exception:
        log.exception("payment_compensation_failed", order_id=str(order_id), transaction_id=transaction_id)
        return
    log.warning("payment_compensated", order_id=str(order_id), transaction_id=transaction_id)
    await log_event(None, "payment_compensated", "order", str(order_id), {"transactionId": transaction_id})


async def confirm_payment(order_id: PydanticObjectId, transaction_id: str, payload: dict) -> dict:
    """Store the payment and flip the order to paid.

    The two writes are not a transaction. The order is only flipped while it
    is still unpaid, so of two overlapping confirmations exactly one wins and
    the loser's payment is removed again. If marking the order fails the
    payment just written is removed before the error propagates.
    A repeat with the same transaction id is a no-op; a different one is refused.
    """
    order = await orders_service.get_order(order_id)
    if order.paid:
        return _already_paid(order, transaction_id)

    payment = Payment(
        transaction_id=transaction_id,
        order_id=order_id,
        amount=order.price,
        currency=_str_or_none(payload.get("currency")),
        payload=payload,
    )
    await payment.insert()

    try:
        result = await Order.find_one(Order.id == order_id, Order.paid == False).update(  # noqa: E712
            Set({
                Order.paid: True,
                Order.transaction_id: transaction_id,
                Order.updated_at: datetime.utcnow(),
            })
        )
    except Exception:
        await _compensate(payment, order_id, transaction_id)
        raise

    if result.matched_count == 0:
        # paid or deleted since it was read
        await _compensate(payment, order_id, transaction_id)
        return _already_paid(await orders_service.get_order(order_id), transaction_id)

    log.info("payment_confirmed", order_id=str(order_id), transaction_id=transaction_id)
    await log_event(order.email, "payment_confirmed", "order", str(order_id), {"transactionId": transaction_id})
    return {"paid": True, "transactionId": transaction_id}
