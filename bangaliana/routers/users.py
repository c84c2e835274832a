from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict

from bangaliana.core.security import TokenService, get_token_service
from bangaliana.deps import require_admin
from bangaliana.models.user import User
from bangaliana.services import users as user_service

router = APIRouter()


class UserUpsert(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str | None = None


def _user_out(u: User) -> dict:
    return {
        "_id": str(u.id),
        "email": u.email,
        "name": u.name,
        "role": u.role,
        **u.profile,
    }


@router.get("/user")
async def users_list(admin: User = Depends(require_admin)):
    """Admin: every user record."""
    return [_user_out(u) for u in await user_service.list_users()]


@router.put("/user/admin/{email}")
async def user_make_admin(email: str, admin: User = Depends(require_admin)):
    """Admin: elevate the target email to role admin."""
    return await user_service.grant_admin(email, admin.email)


@router.put("/user/{email}")
async def user_upsert(
    email: str,
    body: UserUpsert | None = None,
    tokens: TokenService = Depends(get_token_service),
):
    """Upsert the profile and hand back a fresh access token."""
    fields = body.model_dump(exclude_none=True) if body else {}
    result, token = await user_service.upsert_user(email, fields, tokens)
    return {"result": result, "token": token}


@router.get("/admin/{email}")
async def user_is_admin(email: str):
    return {"admin": await user_service.is_admin(email)}
