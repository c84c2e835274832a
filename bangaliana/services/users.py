from datetime import datetime
from typing import Any

from bangaliana.core.audit import log_event
from bangaliana.core.exceptions import NotFoundError
from bangaliana.core.logging import get_logger
from bangaliana.core.results import update_result
from bangaliana.core.security import TokenService
from bangaliana.models.user import ADMIN_ROLE, User

log = get_logger(__name__)

# Fields a client may never set through the profile upsert.
_PROTECTED_FIELDS = {"email", "role", "_id", "id"}


async def get_user(email: str) -> User | None:
    return await User.find_one(User.email == email)


async def list_users() -> list[User]:
    return await User.find_all().to_list()


async def is_admin(email: str) -> bool:
    user = await get_user(email)
    return bool(user and user.is_admin)


async def upsert_user(email: str, fields: dict[str, Any], tokens: TokenService) -> tuple[dict, str]:
    """Create or update the user keyed by email and mint a fresh access token."""
    fields = {k: v for k, v in fields.items() if k not in _PROTECTED_FIELDS}
    name = fields.pop("name", None)
    user = await get_user(email)
    if user:
        if name is not None:
            user.name = name
        user.profile = {**user.profile, **fields}
        user.updated_at = datetime.utcnow()
        await user.save()
        result = update_result(matched=1, modified=1)
    else:
        user = User(email=email, name=name or "", profile=fields)
        await user.insert()
        result = update_result(matched=0, modified=0, upserted_id=user.id)
    log.info("user_upserted", email=email, created=result["upsertedId"] is not None)
    return result, tokens.issue(email)


async def grant_admin(target_email: str, requester_email: str) -> dict:
    user = await get_user(target_email)
    if not user:
        raise NotFoundError("User not found")
    modified = 0 if user.is_admin else 1
    user.role = ADMIN_ROLE
    user.updated_at = datetime.utcnow()
    await user.save()
    log.info("admin_granted", email=target_email, by=requester_email)
    await log_event(requester_email, "admin_granted", "user", str(user.id), {"email": target_email})
    return update_result(matched=1, modified=modified)
