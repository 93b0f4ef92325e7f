"""Async SQLAlchemy engine and session factory.

With DATABASE_URL set, the API serves from the Pg repositories through
the session factory below.  Without it, ``engine`` and
``async_session_factory`` are None and the in-memory repositories serve.
A ``sqlite+aiosqlite://`` URL works for local runs; the pool options
only apply to server databases.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from wellness.core.config import SETTINGS

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for every table in wellness.db.tables."""


def _engine_options(url: str) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": SETTINGS.is_dev}
    if make_url(url).get_backend_name() != "sqlite":
        options.update(pool_size=5, max_overflow=10, pool_pre_ping=True)
    return options


engine: AsyncEngine | None = None
async_session_factory: async_sessionmaker[AsyncSession] | None = None

if SETTINGS.database_url:
    engine = create_async_engine(
        SETTINGS.database_url, **_engine_options(SETTINGS.database_url)
    )
    async_session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )


@asynccontextmanager
async def lifespan_db() -> AsyncIterator[None]:
    """Entered from the app lifespan; disposes the pool on shutdown."""
    if engine is None:
        logger.info("DATABASE_URL not set, serving from in-memory repositories")
        yield
        return

    # Password masked by render_as_string's default.
    logger.info("Database configured: %s", engine.url.render_as_string())
    try:
        yield
    finally:
        await engine.dispose()
        logger.info("Database pool disposed")
