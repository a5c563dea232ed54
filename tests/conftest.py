"""
Pytest configuration and fixtures.
Provides an in-memory database session and a test client wired to it.
"""

import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("DB_CREATE_TABLES", "false")

from datetime import timedelta
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from fxdeals.main import app
from fxdeals.db.base import Base
from fxdeals.db.session import get_db
from fxdeals.schemas.fx_deal import FxDealRequest
from fxdeals.services.validation_service import utc_now
import fxdeals.models  # noqa: F401


# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_session_maker():
    """
    Create a fresh in-memory database and a sessionmaker bound to it.
    """
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture(scope="function")
async def test_db_session(test_session_maker):
    """A single session on the test database."""
    async with test_session_maker() as session:
        yield session


@pytest.fixture(scope="function")
async def test_client(test_session_maker):
    """
    HTTP client for the app with get_db overridden to use the test database.
    """
    async def override_get_db():
        async with test_session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def make_request():
    """Build a valid FxDealRequest, overriding any field by keyword."""
    def _make(**overrides) -> FxDealRequest:
        fields = {
            "deal_unique_id": "D-1",
            "from_currency": "USD",
            "to_currency": "EUR",
            "deal_timestamp": utc_now() - timedelta(days=1),
            "deal_amount": Decimal("100.5"),
        }
        fields.update(overrides)
        return FxDealRequest(**fields)
    return _make


@pytest.fixture
def deal_payload():
    """Build a valid JSON body for POST /fx-deals."""
    def _make(**overrides) -> dict:
        body = {
            "dealUniqueId": "D-1",
            "fromCurrency": "USD",
            "toCurrency": "EUR",
            "dealTimestamp": (utc_now() - timedelta(days=1)).isoformat(),
            "dealAmount": "100.5",
        }
        body.update(overrides)
        return body
    return _make
