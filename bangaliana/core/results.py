"""Write acknowledgements shaped like the MongoDB driver results clients already parse."""

from typing import Any


def insert_result(inserted_id: Any) -> dict:
    return {"acknowledged": True, "insertedId": str(inserted_id)}


def update_result(matched: int, modified: int, upserted_id: Any = None) -> dict:
    return {
        "acknowledged": True,
        "matchedCount": matched,
        "modifiedCount": modified,
        "upsertedCount": 1 if upserted_id is not None else 0,
        "upsertedId": str(upserted_id) if upserted_id is not None else None,
    }


def delete_result(deleted: int) -> dict:
    return {"acknowledged": True, "deletedCount": deleted}
