from beanie import Document


class Food(Document):
    name: str
    description: str = ""
    price: int | float
    image: str | None = None

    class Settings:
        name = "food"
