"""
Database engine, session management, and base model class.

This module sets up SQLAlchemy 2.0 with async support. Key components:

  - Database: owns the async engine and session factory for one app instance
  - Base: Declarative base class that all ORM models inherit from
  - get_db(): FastAPI dependency that provides a session per request

The Database is constructed from the Settings object in create_app() and
stored on app.state, so tests can hand a fresh in-memory database to each
app instead of overriding dependencies.

Session lifecycle:
  Each API request gets its own session via get_db(). The session commits
  on success and rolls back on exception. Atomicity is per request only;
  there is no multi-request transaction anywhere in the API.
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from portfolio.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


class Database:
    """
    Async engine plus session factory.

    Usage:
        database = Database(settings)
        await database.create_all()
        async with database.session() as session:
            ...
        await database.dispose()
    """

    def __init__(self, settings: Settings, url: str | None = None):
        self.url = url or settings.DATABASE_URL
        # echo=True in debug mode logs all SQL statements
        self.engine = create_async_engine(self.url, echo=settings.DEBUG)
        # expire_on_commit=False keeps attributes readable after commit
        # without a lazy (synchronous) reload
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        """Create all tables that don't exist yet."""
        self._ensure_sqlite_directory()
        # Importing the models registers them on Base.metadata
        import portfolio.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self):
        """Yield a session that commits on success and rolls back on error."""
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    def _ensure_sqlite_directory(self) -> None:
        url = make_url(self.url)
        if url.get_backend_name() != "sqlite" or not url.database:
            return
        if url.database == ":memory:":
            return
        directory = os.path.dirname(url.database)
        if directory and not os.path.isdir(directory):
            logger.info("Creating database directory %s", directory)
            os.makedirs(directory, exist_ok=True)


async def get_db(request: Request):
    """
    FastAPI dependency that provides a database session.

    Usage in a route:
        @router.get("/items")
        async def list_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
