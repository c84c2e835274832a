"""Food catalog and reviews: plain insert/find/update/delete."""

from beanie import PydanticObjectId

from bangaliana.core.exceptions import NotFoundError
from bangaliana.core.results import delete_result, insert_result, update_result
from bangaliana.models.food import Food
from bangaliana.models.review import Review


async def list_foods() -> list[Food]:
    return await Food.find_all().to_list()


async def get_food(food_id: PydanticObjectId) -> Food:
    food = await Food.get(food_id)
    if not food:
        raise NotFoundError("Food not found")
    return food


async def create_food(**fields) -> dict:
    food = Food(**fields)
    await food.insert()
    return insert_result(food.id)


async def update_food(food_id: PydanticObjectId, fields: dict) -> dict:
    food = await Food.get(food_id)
    if not food:
        return update_result(matched=0, modified=0)
    changed = False
    for k, v in fields.items():
        if getattr(food, k) != v:
            setattr(food, k, v)
            changed = True
    if changed:
        await food.save()
    return update_result(matched=1, modified=1 if changed else 0)


async def delete_food(food_id: PydanticObjectId) -> dict:
    food = await Food.get(food_id)
    if not food:
        return delete_result(0)
    await food.delete()
    return delete_result(1)


async def list_reviews() -> list[Review]:
    return await Review.find_all().sort(-Review.created_at).to_list()


async def create_review(**fields) -> dict:
    review = Review(**fields)
    await review.insert()
    return insert_result(review.id)
