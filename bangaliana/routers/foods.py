from fastapi import APIRouter
from pydantic import BaseModel

from bangaliana.core.ids import parse_object_id
from bangaliana.models.food import Food
from bangaliana.services import catalog as catalog_service

router = APIRouter()


class FoodCreate(BaseModel):
    name: str
    description: str = ""
    price: int | float
    image: str | None = None


class FoodUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    price: int | float | None = None
    image: str | None = None


def _food_out(f: Food) -> dict:
    return {"_id": str(f.id), "name": f.name, "description": f.description, "price": f.price, "image": f.image}


@router.get("")
async def foods_list():
    return [_food_out(f) for f in await catalog_service.list_foods()]


@router.get("/{food_id}")
async def food_get(food_id: str):
    return _food_out(await catalog_service.get_food(parse_object_id(food_id, "food id")))


@router.post("")
async def food_create(body: FoodCreate):
    return await catalog_service.create_food(**body.model_dump())


@router.put("/{food_id}")
async def food_update(food_id: str, body: FoodUpdate):
    return await catalog_service.update_food(
        parse_object_id(food_id, "food id"), body.model_dump(exclude_unset=True)
    )


@router.delete("/{food_id}")
async def food_delete(food_id: str):
    return await catalog_service.delete_food(parse_object_id(food_id, "food id"))
