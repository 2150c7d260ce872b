"""Engine, sessions and schema setup for the campaign and image tables."""

import logging
from pathlib import Path
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from ohmage.config import Config
from ohmage.infrastructure.persistence.tables import metadata

logger = logging.getLogger(__name__)


def _resolve_sqlite_url(url: str) -> str:
    """Make a file-backed SQLite URL absolute and create its directory.

    ``sqlite+aiosqlite:///~/ohmage.db`` becomes an absolute path under the
    user's home. In-memory databases and other dialects pass through.
    """
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite" or parsed.database in (None, "", ":memory:"):
        return url

    db_path = Path(parsed.database).expanduser().resolve()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return parsed.set(database=str(db_path)).render_as_string(hide_password=False)


def _engine_options(url: str, echo: bool) -> dict[str, Any]:
    if url.startswith("sqlite"):
        # aiosqlite runs queries on a worker thread; one pooled connection
        # keeps an in-memory database alive for the app's lifetime
        return {
            "echo": echo,
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    return {"echo": echo, "pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}


def create_db_engine(config: Config) -> AsyncEngine:
    """Create the async engine for ``config.database.url``."""
    url = _resolve_sqlite_url(config.database.url)
    return create_async_engine(url, **_engine_options(url, config.database.echo))


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


async def create_tables(engine: AsyncEngine) -> None:
    """Create any missing tables."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    logger.info("Database schema ensured")
