"""Process-wide async engine plus the per-request session dependency.

The engine is built lazily from ``DatabaseSettings`` on first use and
released by ``dispose_engine`` when the application shuts down.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from citizen_portal.core.config import DatabaseSettings, get_settings
from citizen_portal.infrastructure.database.base import Base

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _engine_options(database: DatabaseSettings) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": database.echo}
    if database.pool_size is not None:
        options["pool_size"] = database.pool_size
    if database.max_overflow is not None:
        options["max_overflow"] = database.max_overflow
    return options


def get_engine() -> AsyncEngine:
    global _engine, _session_factory
    if _engine is None:
        database = get_settings().database
        _engine = create_async_engine(database.url, **_engine_options(database))
        _session_factory = async_sessionmaker(bind=_engine, class_=AsyncSession, expire_on_commit=False)
        logger.debug("Database engine created for %s", _engine.url.render_as_string(hide_password=True))
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    get_engine()
    if _session_factory is None:
        raise RuntimeError("Database session factory is not initialised")
    return _session_factory


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session: committed when the handler returns, rolled back when it raises."""
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create any missing tables. Alembic owns the schema outside development and tests."""
    from citizen_portal.db import models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Close pooled connections; the next ``get_engine`` call builds a fresh engine."""
    global _engine, _session_factory
    if _engine is None:
        return
    engine, _engine, _session_factory = _engine, None, None
    await engine.dispose()
    logger.info("Database engine disposed")
