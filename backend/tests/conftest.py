"""
Pytest configuration and shared fixtures.

This module provides:
- Environment variable setup for tests (the ``test`` profile)
- Database fixtures with per-test schema creation
- An HTTP client bound to the ASGI app
"""

import os
import sys
from pathlib import Path

import pytest


# Set test environment variables BEFORE any imports
# This must happen first to ensure settings load with test values
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DB_CREATE_ALL"] = "false"
os.environ["SEED_DATA"] = "false"
os.environ["LOG_JSON"] = "true"
os.environ["PAYMENT_LATENCY_SECONDS"] = "0"
os.environ["SHIPPING_LATENCY_SECONDS"] = "0"
os.environ["AUTO_SHIP_ON_PAYMENT"] = "true"

# Add backend directory to path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))


@pytest.fixture
def anyio_backend():
    """
    Configure anyio backend for async tests.

    Returns:
        str: Backend name ("asyncio")
    """
    return "asyncio"


@pytest.fixture(scope="function")
async def db_engine():
    """
    Create all tables on the shared in-memory engine and drop them afterwards.
    """
    from ordermanagement.core.database import engine
    from ordermanagement.models.base import Base
    from ordermanagement import models  # noqa: F401 - register all tables

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(scope="function")
async def db_session(db_engine):
    """
    Provide a database session on an empty schema.
    """
    from ordermanagement.core.database import async_session_maker

    async with async_session_maker() as session:
        yield session


@pytest.fixture(scope="function")
async def seeded_session(db_session):
    """
    Provide a database session with the reference customers and products.

    Customer 1 is Max Mustermann, product 1 is a Laptop at 1299.99 EUR
    with 50 units in stock.
    """
    from ordermanagement.core.seed import seed_initial_data

    await seed_initial_data(db_session)
    await db_session.commit()
    yield db_session


@pytest.fixture(scope="function")
async def client(seeded_session):
    """
    Provide an httpx client that calls the app in-process.

    The reference data is already committed; background tasks run to
    completion before each call returns.
    """
    from httpx import ASGITransport, AsyncClient

    from ordermanagement.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
