from __future__ import annotations

import logging
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from .base import Base
from .config import DbOptions, DbType, get_db_options

logger = logging.getLogger(__name__)

_OPTIONS: DbOptions | None = None
_ENGINE: AsyncEngine | None = None
_SESSION_MAKER: async_sessionmaker[AsyncSession] | None = None


def _build_engine(options: DbOptions) -> AsyncEngine:
    url = options.async_url
    if options.db_type is DbType.SQLITE:
        kwargs = {"connect_args": {"check_same_thread": False}}
        # In-memory SQLite lives per connection; share a single one.
        if ":memory:" in url or url.endswith(":///"):
            kwargs["poolclass"] = StaticPool
        return create_async_engine(url, echo=options.echo, **kwargs)
    return create_async_engine(url, echo=options.echo, pool_pre_ping=True)


# PUBLIC_INTERFACE
def init_database(options: Optional[DbOptions] = None) -> AsyncEngine:
    """
    Initialize the global AsyncEngine and session factory.

    Calling again with equal options returns the existing engine.

    Raises:
        RuntimeError: an engine built from different options is still active;
        await dispose_database() first so its pool is released.
    """
    global _OPTIONS, _ENGINE, _SESSION_MAKER
    options = options or get_db_options()
    if _ENGINE is not None:
        if _OPTIONS == options:
            return _ENGINE
        raise RuntimeError(
            "Database engine already initialized with different options; "
            "call dispose_database() before re-initializing."
        )

    logger.info("Initializing %s database engine", options.db_type.value)
    _OPTIONS = options
    _ENGINE = _build_engine(options)
    _SESSION_MAKER = async_sessionmaker(
        bind=_ENGINE, expire_on_commit=False, autoflush=False, autocommit=False
    )
    return _ENGINE


# PUBLIC_INTERFACE
def get_engine() -> AsyncEngine:
    """Return the global AsyncEngine instance, initializing from the environment if needed."""
    if _ENGINE is None:
        init_database()
    assert _ENGINE is not None
    return _ENGINE


# PUBLIC_INTERFACE
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Return the global session factory."""
    if _SESSION_MAKER is None:
        init_database()
    assert _SESSION_MAKER is not None
    return _SESSION_MAKER


# PUBLIC_INTERFACE
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield an AsyncSession suitable for FastAPI dependency injection.
    Ensures engine/session factory is initialized.
    """
    async with get_session_maker()() as session:
        yield session


# PUBLIC_INTERFACE
async def create_all() -> None:
    """Create tables for every entity registered on Base.metadata."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# PUBLIC_INTERFACE
async def dispose_database() -> None:
    """Dispose the global engine and forget the session factory."""
    global _OPTIONS, _ENGINE, _SESSION_MAKER
    if _ENGINE is not None:
        await _ENGINE.dispose()
    _OPTIONS = None
    _ENGINE = None
    _SESSION_MAKER = None
