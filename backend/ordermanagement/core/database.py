"""
Database configuration and session management.

Provides SQLAlchemy async engine setup, session factory, startup schema
creation and seeding, and dependency injection for database sessions in
FastAPI routes.
"""

import logging
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from ordermanagement.core.config import settings
from ordermanagement.models.base import Base

logger = logging.getLogger(__name__)


def get_async_engine(database_url: str = settings.database_url) -> AsyncEngine:
    """
    Create and configure the async SQLAlchemy engine.

    For SQLite (embedded database):
    - Uses StaticPool so every session shares one connection; an in-memory
      database therefore survives across sessions
    - Enables check_same_thread=False for async compatibility
    - Turns on foreign key enforcement for every connection

    PostgreSQL uses the driver's default pool.

    Returns:
        Configured AsyncEngine instance
    """
    is_sqlite = database_url.startswith("sqlite")

    engine_kwargs: dict = {"echo": False}
    if is_sqlite:
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        engine_kwargs["poolclass"] = StaticPool

    engine = create_async_engine(database_url, **engine_kwargs)

    if is_sqlite:
        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


# Global async engine instance
engine = get_async_engine()


# Async session factory; one session per unit of work
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def create_schema() -> None:
    """Create all tables that do not exist yet."""
    # Import models so every table is registered on the metadata
    from ordermanagement import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def init_db() -> None:
    """
    Initialize the database at application startup.

    Creates the schema when ``DB_CREATE_ALL`` is enabled and loads the
    reference customers and products when ``SEED_DATA`` is enabled.
    Seeding only touches empty tables.
    """
    if settings.db_create_all:
        await create_schema()
        logger.info("Database schema ready")

    if settings.seed_data:
        from ordermanagement.core.seed import seed_initial_data

        async with async_session_maker() as session:
            created = await seed_initial_data(session)
            await session.commit()
        if created:
            logger.info(f"Seeded {created} reference records")


async def close_db() -> None:
    """
    Close the database connection.

    Should be called at application shutdown to cleanly close
    all database connections.
    """
    await engine.dispose()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function to get database session.

    Provides a database session for FastAPI route handlers.
    Automatically handles session lifecycle (commit/rollback/close).

    Yields:
        AsyncSession instance for database operations

    Example:
        @router.get("/products")
        async def list_products(db: AsyncSession = Depends(get_db)):
            return await ProductRepository(db).list_all()

    Note:
        - Routes that publish domain events commit explicitly before
          scheduling dispatch; the commit here is then a no-op
        - Exceptions trigger automatic rollback
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
