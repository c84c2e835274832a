"""Signed, time-limited access tokens and bearer header parsing."""

import hashlib
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from itsdangerous import BadData, SignatureExpired, URLSafeTimedSerializer

from bangaliana.core.config import get_settings
from bangaliana.core.exceptions import ForbiddenError, UnauthorizedError

TOKEN_SALT = "bangaliana-access-token"


@dataclass(frozen=True)
class Identity:
    """Caller identity decoded from a verified access token."""
    email: str


class TokenService:
    def __init__(self, secret_key: str, max_age_seconds: int = 24 * 3600):
        self.max_age_seconds = max_age_seconds
        self._serializer = URLSafeTimedSerializer(
            secret_key,
            salt=TOKEN_SALT,
            signer_kwargs={"key_derivation": "hmac", "digest_method": hashlib.sha256},
        )

    def issue(self, email: str) -> str:
        """Sign {email}; the issued-at timestamp is embedded by the signer."""
        return self._serializer.dumps({"email": email})

    def decode(self, token: str) -> Identity:
        try:
            payload: Any = self._serializer.loads(token, max_age=self.max_age_seconds)
        except SignatureExpired as e:
            raise ForbiddenError("Forbidden access") from e
        except BadData as e:
            raise ForbiddenError("Forbidden access") from e
        email = payload.get("email") if isinstance(payload, dict) else None
        if not email or not isinstance(email, str):
            raise ForbiddenError("Forbidden access")
        return Identity(email=email)

    def verify(self, authorization: str | None) -> Identity:
        """Validate a raw Authorization header value.

        No header (or a non-bearer scheme) is Unauthorized; anything wrong
        with the token itself is Forbidden.
        """
        if not authorization or not authorization.strip():
            raise UnauthorizedError()
        parts = authorization.split()
        if parts[0].lower() != "bearer":
            raise UnauthorizedError()
        if len(parts) < 2:
            raise ForbiddenError("Forbidden access")
        return self.decode(parts[1])


@lru_cache
def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(settings.secret_key, settings.token_max_age_seconds)
