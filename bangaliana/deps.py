"""Shared FastAPI dependencies: bearer verification and the admin gate."""

from fastapi import Depends, Header, Request

from bangaliana.core.exceptions import ForbiddenError, UnauthorizedError
from bangaliana.core.logging import get_logger
from bangaliana.core.security import Identity, TokenService, get_token_service
from bangaliana.models.user import User
from bangaliana.services import users as user_service

log = get_logger(__name__)


async def get_identity(
    request: Request,
    authorization: str | None = Header(default=None),
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    """Dependency: verify the bearer token and keep the identity on request.state."""
    try:
        identity = tokens.verify(authorization)
    except (UnauthorizedError, ForbiddenError) as e:
        log.info("auth_rejected", path=request.url.path, reason=type(e).__name__)
        raise
    request.state.identity = identity
    return identity


async def require_admin(identity: Identity = Depends(get_identity)) -> User:
    """Dependency: caller's stored role must be admin; an unknown caller is not."""
    user = await user_service.get_user(identity.email)
    if user is None or not user.is_admin:
        log.info("admin_rejected", email=identity.email, known=user is not None)
        raise ForbiddenError("Forbidden")
    return user


def require_owner(identity: Identity, email: str) -> None:
    """A caller may only read records filed under their own email."""
    if identity.email != email:
        raise ForbiddenError("Forbidden access")
