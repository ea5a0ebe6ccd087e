"""
Parcel Server — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own SQLite database (aiosqlite) with the schema
       created from Base.metadata. The API client runs the real app through
       httpx's ASGITransport with three dependency overrides:

           get_db_session        → session on the per-test database
           get_identity_provider → FakeIdentityProvider
           get_payment_provider  → FakePaymentProvider

Bearer tokens in tests:
    "Bearer valid:<email>" authenticates as <email>; any other token is
    rejected with 403, the way an expired or forged ID token would be.
    Use auth_headers("someone@example.com").
"""

import os
import tempfile
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional
from unittest.mock import AsyncMock, MagicMock

# Settings are read at import time: point them at throw-away values first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="parcel_test_"), "app.db"
)
os.environ["STRIPE_SECRET_KEY"] = "sk_test_not_real"
os.environ["FIREBASE_PROJECT_ID"] = "parcel-test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from parcel_server.auth import get_identity_provider  # noqa: E402
from parcel_server.database import Base, get_db_session  # noqa: E402
from parcel_server.exceptions import ForbiddenError, PaymentProcessorError  # noqa: E402
from parcel_server.models import Rider, User  # noqa: E402
from parcel_server.services.payment_service import get_payment_provider  # noqa: E402
from parcel_server.services.provider_base import (  # noqa: E402
    Identity,
    IdentityProvider,
    PaymentProvider,
)
from parcel_server.store import DocumentStore  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Provider Fakes
# ══════════════════════════════════════════════════════════════════════════

class FakeIdentityProvider(IdentityProvider):
    async def verify_token(self, token: str) -> Identity:
        if not token.startswith("valid:"):
            raise ForbiddenError(context={"reason": "fake_rejection"})
        email = token[len("valid:"):].lower()
        return Identity(uid=f"uid-{email}", email=email)


class FakePaymentProvider(PaymentProvider):
    """Records requested amounts; set `error` to simulate a processor failure."""

    def __init__(self):
        self.amounts = []
        self.error: Optional[str] = None

    async def create_payment_intent(self, amount_in_cents: int) -> str:
        if self.error:
            raise PaymentProcessorError(message=self.error)
        self.amounts.append(amount_in_cents)
        return f"pi_test_{amount_in_cents}_secret_abc"


def auth_headers(email: str) -> dict:
    return {"Authorization": f"Bearer valid:{email}"}


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """A fresh SQLite database with all five tables."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession for exercising driver failures without a database.

    Usage:
        mock_db_session.execute = AsyncMock(side_effect=OperationalError(...))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def store(session_factory) -> AsyncGenerator[DocumentStore, None]:
    """A DocumentStore over one open session, for store and service tests."""
    async with session_factory() as session:
        yield DocumentStore(session)


@pytest_asyncio.fixture
async def seed_user(session_factory):
    """
    Insert a user with a given role and commit it.

    Usage:
        await seed_user("admin@example.com", "admin")
    """

    async def _seed(email: str, role: Optional[str] = "user") -> User:
        async with session_factory() as session:
            user = User(
                email=email.lower(),
                role=role,
                created_at=datetime.now(timezone.utc),
            )
            session.add(user)
            await session.commit()
            return user

    return _seed


@pytest_asyncio.fixture
async def seed_rider(session_factory):
    """Insert a rider document directly (status and district configurable)."""

    async def _seed(
        email: str = "rider@example.com",
        name: str = "Rider One",
        district: str = "Dhaka",
        status: str = "active",
    ) -> Rider:
        async with session_factory() as session:
            rider = Rider(
                name=name,
                email=email,
                district=district,
                status=status,
                work_status="idle",
                created_at=datetime.now(timezone.utc),
            )
            session.add(rider)
            await session.commit()
            return rider

    return _seed


# ══════════════════════════════════════════════════════════════════════════
# API Client
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def payment_provider() -> FakePaymentProvider:
    return FakePaymentProvider()


@pytest_asyncio.fixture
async def test_client(session_factory, payment_provider):
    """
    HTTPX AsyncClient talking to the app in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from parcel_server.main import app

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    identity_provider = FakeIdentityProvider()
    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    app.dependency_overrides[get_payment_provider] = lambda: payment_provider

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def create_parcel(test_client):
    """POST a parcel as `email` and return its id."""

    async def _create(email: str = "alice@example.com", **fields) -> str:
        body = {"title": "Documents", "parcel_type": "document", "cost": 60, **fields}
        response = await test_client.post("/parcels", json=body, headers=auth_headers(email))
        assert response.status_code == 201, response.text
        return response.json()["inserted_id"]

    return _create
