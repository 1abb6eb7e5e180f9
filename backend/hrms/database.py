"""Async engine and session factory for the HRMS API."""
from collections.abc import AsyncGenerator
import logging

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .config import get_settings

_logger = logging.getLogger(__name__)

settings = get_settings()
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite+") else {}
engine = create_async_engine(settings.database_url, future=True, echo=False, connect_args=connect_args)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)


if settings.database_url.startswith("sqlite"):

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
        """SQLite only honours ON DELETE rules with this pragma set per connection."""

        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()


async def create_schema(bind: AsyncEngine = engine) -> None:
    """Create any missing tables for the declared models."""

    from .models import Base

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    _logger.info("Database schema ready on %s", bind.url.render_as_string(hide_password=True))


async def drop_schema(bind: AsyncEngine = engine) -> None:
    """Drop every table; used by the test suite."""

    from .models import Base

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async SQLAlchemy session per request."""

    async with AsyncSessionLocal() as session:
        yield session
