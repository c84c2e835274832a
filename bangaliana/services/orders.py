"""Order store: create, read, list, five-field upsert, delete."""

from datetime import datetime

from beanie import PydanticObjectId
from beanie.odm.operators.update.general import Set, SetOnInsert

from bangaliana.core.exceptions import NotFoundError
from bangaliana.core.logging import get_logger
from bangaliana.core.results import delete_result, insert_result, update_result
from bangaliana.models.order import Order

log = get_logger(__name__)

REPLACEABLE_FIELDS = ("email", "price", "status", "description", "phone")


def order_to_dict(order: Order) -> dict:
    return {
        "_id": str(order.id),
        "email": order.email,
        "price": order.price,
        "status": order.status,
        "description": order.description,
        "phone": order.phone,
        "paid": order.paid,
        "transactionId": order.transaction_id,
    }


async def create_order(
    email: str,
    price: int | float,
    status: str = "pending",
    description: str = "",
    phone: str = "",
) -> dict:
    order = Order(email=email, price=price, status=status, description=description, phone=phone)
    await order.insert()
    log.info("order_created", order_id=str(order.id), email=email)
    return insert_result(order.id)


async def get_order(order_id: PydanticObjectId) -> Order:
    order = await Order.get(order_id)
    if not order:
        raise NotFoundError("Order not found")
    return order


async def list_orders() -> list[Order]:
    return await Order.find_all().to_list()


async def list_orders_for(email: str) -> list[Order]:
    return await Order.find(Order.email == email).to_list()


async def upsert_order(order_id: PydanticObjectId, fields: dict) -> dict:
    """$set the five customer-editable fields; an unknown id creates the order.

    paid and transaction_id are only written on insert, so an edit never
    overwrites a confirmation that landed in between.
    """
    values = {getattr(Order, k): fields[k] for k in REPLACEABLE_FIELDS}
    now = datetime.utcnow()
    result = await Order.find_one(Order.id == order_id).update(
        Set({**values, Order.updated_at: now}),
        SetOnInsert({Order.paid: False, Order.transaction_id: None, Order.created_at: now}),
        upsert=True,
    )
    created = result.upserted_id is not None
    log.info("order_upserted", order_id=str(order_id), created=created)
    return update_result(
        matched=result.matched_count,
        modified=result.modified_count,
        upserted_id=order_id if created else None,
    )


async def delete_order(order_id: PydanticObjectId) -> dict:
    order = await Order.get(order_id)
    if not order:
        return delete_result(0)
    await order.delete()
    log.info("order_deleted", order_id=str(order_id))
    return delete_result(1)
