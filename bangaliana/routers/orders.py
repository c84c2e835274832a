from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field

from bangaliana.core.exceptions import BadRequestError
from bangaliana.core.ids import parse_object_id
from bangaliana.core.security import Identity
from bangaliana.deps import get_identity, require_admin, require_owner
from bangaliana.services import orders as orders_service
from bangaliana.services import payments as payments_service

router = APIRouter()


class OrderCreate(BaseModel):
    email: str
    price: int | float
    status: str = "pending"
    description: str = ""
    phone: str = ""


class OrderUpdate(BaseModel):
    email: str
    price: int | float
    status: str = "pending"
    description: str = ""
    phone: str = ""


class PaymentConfirmation(BaseModel):
    """Whatever the client sends is kept on the payment record; transactionId is required."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    transaction_id: str = Field(alias="transactionId", min_length=1)


@router.post("/order")
async def order_create(body: OrderCreate):
    return await orders_service.create_order(**body.model_dump())


@router.get("/order")
async def orders_list(
    email: str | None = Query(default=None),
    identity: Identity = Depends(get_identity),
):
    """Orders filed under the caller's own email; without email, every order (admin only)."""
    if email is None:
        await require_admin(identity)
        orders = await orders_service.list_orders()
    else:
        require_owner(identity, email)
        orders = await orders_service.list_orders_for(email)
    return [orders_service.order_to_dict(o) for o in orders]


@router.get("/order/{order_id}")
async def order_get(order_id: str):
    order = await orders_service.get_order(parse_object_id(order_id, "order id"))
    return orders_service.order_to_dict(order)


@router.put("/order/{order_id}")
async def order_replace(order_id: str, body: list[OrderUpdate]):
    """Full replace of the order at body[0]; creates the order if the id is unknown."""
    oid = parse_object_id(order_id, "order id")
    if not body:
        raise BadRequestError("Expected an array with one order")
    return await orders_service.upsert_order(oid, body[0].model_dump())


@router.patch("/order/{order_id}")
async def order_confirm_payment(order_id: str, body: PaymentConfirmation):
    """Record the payment and mark the order paid."""
    oid = parse_object_id(order_id, "order id")
    payload = body.model_dump(by_alias=True)
    return await payments_service.confirm_payment(oid, body.transaction_id, payload)


@router.delete("/order/{order_id}")
async def order_delete(order_id: str):
    return await orders_service.delete_order(parse_object_id(order_id, "order id"))
