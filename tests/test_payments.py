"""Payment intents and payment confirmation."""

import asyncio
from decimal import Decimal

import pytest
import stripe
from beanie import PydanticObjectId

from bangaliana.core.exceptions import BadRequestError, ConflictError
from bangaliana.models.audit_log import AuditLog
from bangaliana.models.order import Order
from bangaliana.models.payment import Payment
from bangaliana.services import orders as orders_service
from bangaliana.services import payments as payments_service
from bangaliana.services.payments import to_minor_units

pytestmark = pytest.mark.asyncio


async def _order(client, price=1999) -> str:
    r = await client.post(
        "/order",
        json={"email": "eater@example.com", "price": price, "description": "thali", "phone": "1"},
    )
    return r.json()["insertedId"]


async def test_intent_amount_is_price_times_hundred(client, stripe_intent):
    r = await client.post("/create-payment-intent", json={"price": 1999})
    assert r.status_code == 200
    assert r.json() == {"clientSecret": "pi_test_123_secret_abc"}
    kwargs = stripe_intent.call_args.kwargs
    assert kwargs["amount"] == 199900
    assert kwargs["currency"] == "usd"
    assert kwargs["payment_method_types"] == ["card"]


async def test_intent_with_cents_is_exact(client, stripe_intent):
    r = await client.post("/create-payment-intent", json={"price": 19.99})
    assert r.status_code == 200
    assert stripe_intent.call_args.kwargs["amount"] == 1999


async def test_intent_rejects_fraction_of_cent(client, stripe_intent):
    r = await client.post("/create-payment-intent", json={"price": 1.005})
    assert r.status_code == 400
    stripe_intent.assert_not_called()


async def test_intent_gateway_failure_is_bad_gateway(client, mocker):
    mocker.patch("stripe.PaymentIntent.create", side_effect=stripe.StripeError("card_declined"))
    r = await client.post("/create-payment-intent", json={"price": 10})
    assert r.status_code == 502
    assert r.json()["error"]["code"] == "GATEWAY_ERROR"


async def test_intent_does_not_touch_orders(client, stripe_intent):
    order_id = await _order(client)
    await client.post("/create-payment-intent", json={"price": 1999})
    order = await Order.get(PydanticObjectId(order_id))
    assert order.paid is False
    assert await Payment.find_all().count() == 0


@pytest.mark.parametrize(
    "price, expected",
    [(Decimal("1999"), 199900), (Decimal("19.99"), 1999), (Decimal("0.5"), 50)],
)
async def test_to_minor_units(price, expected):
    assert to_minor_units(price) == expected


@pytest.mark.parametrize("price", [Decimal("0"), Decimal("-1"), Decimal("0.001")])
async def test_to_minor_units_rejects(price):
    with pytest.raises(BadRequestError):
        to_minor_units(price)


async def test_confirm_payment_records_and_marks_paid(client):
    order_id = await _order(client)
    r = await client.patch(
        f"/order/{order_id}",
        json={"transactionId": "tx_1", "email": "eater@example.com", "currency": "usd"},
    )
    assert r.status_code == 200
    assert r.json() == {"paid": True, "transactionId": "tx_1"}

    payment = await Payment.find_one(Payment.transaction_id == "tx_1")
    assert payment is not None
    assert str(payment.order_id) == order_id
    assert payment.payload["transactionId"] == "tx_1"
    assert payment.payload["email"] == "eater@example.com"
    assert payment.currency == "usd"

    body = (await client.get(f"/order/{order_id}")).json()
    assert body["paid"] is True
    assert body["transactionId"] == "tx_1"


async def test_confirm_payment_replay_is_idempotent(client):
    order_id = await _order(client)
    await client.patch(f"/order/{order_id}", json={"transactionId": "tx_1"})
    r = await client.patch(f"/order/{order_id}", json={"transactionId": "tx_1"})
    assert r.status_code == 200
    assert r.json() == {"paid": True, "transactionId": "tx_1"}
    assert await Payment.find(Payment.transaction_id == "tx_1").count() == 1


async def test_second_confirmation_with_other_transaction_is_rejected(client):
    order_id = await _order(client)
    await client.patch(f"/order/{order_id}", json={"transactionId": "tx_1"})
    r = await client.patch(f"/order/{order_id}", json={"transactionId": "tx_2"})
    assert r.status_code == 409
    assert r.json()["error"]["details"] == {"transactionId": "tx_1"}
    body = (await client.get(f"/order/{order_id}")).json()
    assert body["transactionId"] == "tx_1"
    assert await Payment.find(Payment.transaction_id == "tx_2").count() == 0


async def test_confirm_payment_for_absent_order_writes_nothing(client):
    r = await client.patch(f"/order/{PydanticObjectId()}", json={"transactionId": "tx_1"})
    assert r.status_code == 404
    assert await Payment.find_all().count() == 0


async def test_confirm_payment_requires_transaction_id(client):
    order_id = await _order(client)
    r = await client.patch(f"/order/{order_id}", json={"amount": 1999})
    assert r.status_code == 422


def _fail_paid_update(mocker):
    """Make the conditional paid update raise; plain lookups keep working."""
    real_find_one = Order.find_one

    def find_one(*args, **kwargs):
        query = real_find_one(*args, **kwargs)
        if len(args) == 2:
            query.update = mocker.Mock(side_effect=RuntimeError("write failed"))
        return query

    return mocker.patch.object(Order, "find_one", side_effect=find_one)


async def test_failed_order_update_removes_payment(client, mocker):
    order_id = await _order(client)
    _fail_paid_update(mocker)
    r = await client.patch(f"/order/{order_id}", json={"transactionId": "tx_1"})
    assert r.status_code == 500
    assert await Payment.find_all().count() == 0
    assert await AuditLog.find(AuditLog.event_type == "payment_compensated").count() == 1
    mocker.stopall()
    order = await Order.get(PydanticObjectId(order_id))
    assert order.paid is False


async def test_failed_compensation_keeps_original_error(db, mocker):
    order = Order(email="eater@example.com", price=10)
    await order.insert()
    _fail_paid_update(mocker)
    mocker.patch.object(Payment, "delete", side_effect=ConnectionError("mongo gone"))
    with pytest.raises(RuntimeError, match="write failed"):
        await payments_service.confirm_payment(order.id, "tx_1", {"transactionId": "tx_1"})
    assert await AuditLog.find(AuditLog.event_type == "payment_compensated").count() == 0


async def test_edit_racing_confirmation_keeps_order_paid(db):
    order = Order(email="eater@example.com", price=1999)
    await order.insert()
    stale = await Order.get(order.id)
    await asyncio.gather(
        orders_service.upsert_order(order.id, {**stale.model_dump(), "status": "cooking"}),
        payments_service.confirm_payment(order.id, "tx_1", {"transactionId": "tx_1"}),
    )
    await orders_service.upsert_order(order.id, {**stale.model_dump(), "status": "delivered"})
    fresh = await Order.get(order.id)
    assert fresh.paid is True
    assert fresh.transaction_id == "tx_1"
    assert fresh.status == "delivered"
    assert await Payment.find(Payment.transaction_id == "tx_1").count() == 1


async def test_overlapping_confirmations_have_one_winner(db):
    order = Order(email="eater@example.com", price=1999)
    await order.insert()
    results = await asyncio.gather(
        payments_service.confirm_payment(order.id, "tx_a", {"transactionId": "tx_a"}),
        payments_service.confirm_payment(order.id, "tx_b", {"transactionId": "tx_b"}),
        return_exceptions=True,
    )
    wins = [r for r in results if isinstance(r, dict)]
    conflicts = [r for r in results if isinstance(r, ConflictError)]
    assert len(wins) == 1
    assert len(conflicts) == 1
    fresh = await Order.get(order.id)
    assert fresh.paid is True
    assert fresh.transaction_id == wins[0]["transactionId"]
    payments = await Payment.find_all().to_list()
    assert [p.transaction_id for p in payments] == [fresh.transaction_id]
