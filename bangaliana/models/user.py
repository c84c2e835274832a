from datetime import datetime
from typing import Any

from beanie import Document, Indexed
from pydantic import Field

ADMIN_ROLE = "admin"


class User(Document):
    email: Indexed(str, unique=True)
    name: str = ""
    role: str | None = None  # None | "user" | "admin"
    profile: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "users"

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE
