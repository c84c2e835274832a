import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGODB_DB_NAME", "bangaliana_test")
os.environ.setdefault("SECRET_KEY", "test-secret-key-min-32-characters-long")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")


@pytest_asyncio.fixture
async def db():
    """Fresh in-memory database bound to every document model."""
    from bangaliana.db.init import init_db
    database = AsyncMongoMockClient()["bangaliana_test"]
    await init_db(database=database)
    yield database


@pytest_asyncio.fixture
async def client(db) -> AsyncGenerator[AsyncClient, None]:
    from bangaliana.main import app
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def tokens():
    from bangaliana.core.security import get_token_service
    return get_token_service()


@pytest.fixture
def bearer(tokens):
    def _bearer(email: str) -> dict:
        return {"Authorization": f"Bearer {tokens.issue(email)}"}
    return _bearer


@pytest.fixture
def stripe_intent(mocker):
    """Patch Stripe so PaymentIntent.create returns a canned intent."""
    intent = mocker.Mock()
    intent.id = "pi_test_123"
    intent.client_secret = "pi_test_123_secret_abc"
    return mocker.patch("stripe.PaymentIntent.create", return_value=intent)
