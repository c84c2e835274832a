from functools import lru_cache
from typing import Any, List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_CORS = ["http://localhost:3000", "http://localhost:5173"]
DEFAULT_SECRET_KEY = "change-me-in-production-min-32-chars"


def _parse_cors_origins(v: Any) -> List[str]:
    if v is None or v == "":
        return _DEFAULT_CORS.copy()
    if isinstance(v, list):
        return [x for x in v if isinstance(x, str) and x.strip()]
    s = str(v).strip()
    if not s:
        return _DEFAULT_CORS.copy()
    if s.startswith("["):
        import json
        try:
            out = json.loads(s)
        except ValueError:
            return _DEFAULT_CORS.copy()
        return [x for x in out if isinstance(x, str) and x.strip()] or _DEFAULT_CORS.copy()
    return [x.strip() for x in s.split(",") if x.strip()] or _DEFAULT_CORS.copy()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    env: str = Field(default="development", description="ENV")
    debug: bool = Field(default=False, description="DEBUG")

    # Access tokens
    secret_key: str = Field(default=DEFAULT_SECRET_KEY, alias="SECRET_KEY")
    token_max_age_seconds: int = Field(default=24 * 3600, alias="TOKEN_MAX_AGE_SECONDS")

    # MongoDB
    mongodb_uri: str = Field(default="mongodb://localhost:27017", alias="MONGODB_URI")
    mongodb_db_name: str = Field(default="bangaliana", alias="MONGODB_DB_NAME")

    # Stripe
    stripe_secret_key: str = Field(default="", alias="STRIPE_SECRET_KEY")
    payment_currency: str = Field(default="usd", alias="PAYMENT_CURRENCY")

    # Sentry
    sentry_dsn: str | None = Field(default=None, alias="SENTRY_DSN")

    # CORS: env as string, exposed as list
    cors_origins_raw: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        alias="CORS_ORIGINS",
        description="Comma-separated or JSON list",
    )

    @property
    def cors_origins(self) -> List[str]:
        return _parse_cors_origins(getattr(self, "cors_origins_raw", None))


def check_signing_key(settings: Settings) -> None:
    """Refuse to start a production process with a weak token signing key."""
    if settings.env != "production":
        return
    key = settings.secret_key or ""
    if key == DEFAULT_SECRET_KEY or len(key) < 32:
        raise RuntimeError("SECRET_KEY must be set to a value of at least 32 characters in production")


@lru_cache
def get_settings() -> Settings:
    return Settings()
