from fastapi import APIRouter
from pydantic import BaseModel, Field

from bangaliana.services import catalog as catalog_service

router = APIRouter()


class ReviewCreate(BaseModel):
    name: str
    email: str | None = None
    rating: int = Field(ge=1, le=5)
    comment: str = ""
    image: str | None = None


@router.get("")
async def reviews_list():
    """Newest first."""
    reviews = await catalog_service.list_reviews()
    return [
        {
            "_id": str(r.id),
            "name": r.name,
            "email": r.email,
            "rating": r.rating,
            "comment": r.comment,
            "image": r.image,
            "created_at": r.created_at.isoformat(),
        }
        for r in reviews
    ]


@router.post("")
async def review_create(body: ReviewCreate):
    return await catalog_service.create_review(**body.model_dump())
