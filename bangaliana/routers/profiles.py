from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from bangaliana.core.security import Identity
from bangaliana.deps import get_identity, require_admin, require_owner
from bangaliana.services import profiles as profiles_service

router = APIRouter()


class ProfileCreate(BaseModel):
    email: str
    name: str = ""
    phone: str = ""
    address: str = ""
    image: str | None = None


@router.post("")
async def profile_create(body: ProfileCreate):
    return await profiles_service.create_profile(**body.model_dump())


@router.get("")
async def profiles_list(
    email: str | None = Query(default=None),
    identity: Identity = Depends(get_identity),
):
    if email is None:
        await require_admin(identity)
        profiles = await profiles_service.list_profiles()
    else:
        require_owner(identity, email)
        profiles = await profiles_service.list_profiles_for(email)
    return [
        {
            "_id": str(p.id),
            "email": p.email,
            "name": p.name,
            "phone": p.phone,
            "address": p.address,
            "image": p.image,
        }
        for p in profiles
    ]
