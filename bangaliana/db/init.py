import certifi
from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from bangaliana.core.config import get_settings
from bangaliana.models.audit_log import AuditLog
from bangaliana.models.food import Food
from bangaliana.models.order import Order
from bangaliana.models.payment import Payment
from bangaliana.models.review import Review
from bangaliana.models.user import User
from bangaliana.models.user_profile import UserProfile

DOCUMENT_MODELS = [
    User,
    UserProfile,
    Food,
    Review,
    Order,
    Payment,
    AuditLog,
]


def _use_tls(uri: str) -> bool:
    """True if URI uses TLS (Atlas or explicit tls=true). Avoids TLS for plain mongodb:// in CI."""
    return "mongodb+srv://" in uri or "tls=true" in uri.lower()


async def init_db(database: AsyncIOMotorDatabase | None = None) -> None:
    """Bind all document models to one database for the life of the process."""
    if database is None:
        settings = get_settings()
        kwargs = {}
        if _use_tls(settings.mongodb_uri):
            kwargs["tlsCAFile"] = certifi.where()
        client = AsyncIOMotorClient(settings.mongodb_uri, **kwargs)
        database = client[settings.mongodb_db_name]
    await init_beanie(database=database, document_models=DOCUMENT_MODELS)
