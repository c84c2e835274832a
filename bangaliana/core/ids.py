from beanie import PydanticObjectId
from bson.errors import InvalidId

from bangaliana.core.exceptions import BadRequestError


def parse_object_id(value: str, what: str = "id") -> PydanticObjectId:
    """Path ids arrive as hex strings; reject anything Mongo would not accept."""
    try:
        return PydanticObjectId(value)
    except (InvalidId, TypeError) as e:
        raise BadRequestError(f"Invalid {what}: {value}") from e
