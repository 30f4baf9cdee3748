import hashlib
import hmac
import json
import os
import time
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock, MagicMock, patch

os.environ.setdefault("DB_TYPE", "sqlite")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_secret")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

from signhook.api.core.config import settings  # noqa: E402

# Import all models to ensure they are registered with SQLAlchemy before creating tables
from signhook.api.modules.v1.billing import models as billing_models  # noqa: E402,F401
from signhook.api.modules.v1.documents import models as document_models  # noqa: E402,F401
from signhook.api.modules.v1.users import models as user_models  # noqa: E402,F401

TEST_DATABASE_URL = "sqlite+aiosqlite://"
TEST_WEBHOOK_SECRET = "whsec_test_secret"

# 1x1 transparent PNG
TEST_SIGNATURE_PNG = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture(autouse=True)
def webhook_settings(monkeypatch):
    """Pin the settings webhook verification depends on."""
    monkeypatch.setattr(settings, "STRIPE_WEBHOOK_SECRET", TEST_WEBHOOK_SECRET)
    monkeypatch.setattr(settings, "STRIPE_WEBHOOK_TOLERANCE", 300)
    monkeypatch.setattr(settings, "PLEDGE_CHECKOUT_SOURCE", "landing")
    monkeypatch.setattr(settings, "SIGNATURE_CACHE_PREFIX", "signature:")


@pytest.fixture(autouse=True, scope="function")
def mock_redis(monkeypatch):
    """
    Mock Redis client for all tests to avoid connection errors.
    This fixture is autouse=True so it applies to all tests automatically.
    """
    monkeypatch.setattr(settings, "REDIS_URL", "redis://localhost:6379/0")

    # Create a simple in-memory store to simulate Redis behavior
    redis_store = {}

    mock_redis_client = AsyncMock()

    async def mock_get(key):
        return redis_store.get(key)

    async def mock_set(key, value, **kwargs):
        redis_store[key] = str(value)
        return True

    async def mock_setex(key, seconds, value):
        redis_store[key] = str(value)
        return True

    async def mock_delete(*keys):
        count = 0
        for key in keys:
            if key in redis_store:
                del redis_store[key]
                count += 1
        return count

    async def mock_exists(key):
        return 1 if key in redis_store else 0

    mock_redis_client.get.side_effect = mock_get
    mock_redis_client.set.side_effect = mock_set
    mock_redis_client.setex.side_effect = mock_setex
    mock_redis_client.delete.side_effect = mock_delete
    mock_redis_client.exists.side_effect = mock_exists
    mock_redis_client.store = redis_store

    mock_pool = MagicMock()
    mock_pool.disconnect = AsyncMock()

    with (
        patch("redis.asyncio.connection.ConnectionPool.from_url", return_value=mock_pool),
        patch("redis.asyncio.Redis", return_value=mock_redis_client),
    ):
        # Reset the global _redis_client before each test
        import signhook.api.core.dependencies.redis_service as redis_module

        redis_module._redis_client = None
        redis_module._connection_pool = None
        yield mock_redis_client
        redis_module._redis_client = None
        redis_module._connection_pool = None


@pytest_asyncio.fixture
async def test_engine():
    """In-memory SQLite engine with all tables created."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine):
    """Async session bound to the in-memory test database."""
    session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with session_maker() as session:
        yield session


def sign_payload(
    payload: str,
    secret: str = TEST_WEBHOOK_SECRET,
    timestamp: Optional[int] = None,
) -> str:
    """Build a Stripe-Signature header value for a raw payload."""
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed = f"{timestamp}.{payload}".encode("utf-8")
    signature = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


def build_event(
    event_type: str,
    data_object: Dict[str, Any],
    event_id: str = "evt_test_123",
) -> str:
    """Serialize a Stripe event envelope the way Stripe sends it."""
    return json.dumps(
        {
            "id": event_id,
            "object": "event",
            "type": event_type,
            "created": int(time.time()),
            "livemode": False,
            "api_version": "2024-06-20",
            "data": {"object": data_object},
        }
    )


@pytest.fixture
def stripe_signer():
    return sign_payload


@pytest.fixture
def stripe_event():
    return build_event


@pytest.fixture
def signature_png():
    return TEST_SIGNATURE_PNG
