from datetime import datetime

from beanie import Document
from pydantic import Field


class UserProfile(Document):
    email: str
    name: str = ""
    phone: str = ""
    address: str = ""
    image: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "userProfile"
        indexes = [[("email", 1)]]
