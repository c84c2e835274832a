from datetime import datetime
from typing import Any

from beanie import Document, PydanticObjectId
from pydantic import Field


class Payment(Document):
    """One record per successful confirmation; never updated."""
    transaction_id: str
    order_id: PydanticObjectId
    amount: int | float | None = None
    currency: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)  # body as sent by the client
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "payment"
        indexes = [
            [("transaction_id", 1)],
            [("order_id", 1)],
        ]
