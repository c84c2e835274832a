from datetime import datetime

from beanie import Document
from pydantic import Field


class Review(Document):
    name: str
    email: str | None = None
    rating: int = Field(ge=1, le=5)
    comment: str = ""
    image: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "reviews"
