from datetime import datetime

from beanie import Document
from pydantic import Field


class Order(Document):
    """Customer order; paid flips to True once, on payment confirmation."""
    email: str
    price: int | float
    status: str = "pending"
    description: str = ""
    phone: str = ""
    paid: bool = False
    transaction_id: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "order"
        indexes = [[("email", 1)]]
