"""Vigil Maintenance — Database Handle.

SQLAlchemy 2.0 async access to the relational store. PostgreSQL (asyncpg)
is the production target; SQLite (aiosqlite) URLs serve local runs and
tests.

``Database`` is owned by the application: the FastAPI lifespan initializes
and disposes it, and routes receive one session per request from
``get_db``.

Usage:
    database = Database(settings.database)
    await database.init()

    async with database.session() as session:
        async with transaction(session):
            session.add(Equipment(name="Feed Pump #1", type="Pump"))
"""

from __future__ import annotations

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from config import DatabaseSettings
from logger import get_logger

logger = get_logger(__name__)


def _engine_options(url: URL, settings: DatabaseSettings) -> dict[str, Any]:
    """Pool and driver options for the backend behind ``url``."""
    if url.get_backend_name() == "sqlite":
        # One shared connection keeps in-memory databases alive across sessions
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}

    options: dict[str, Any] = {
        "pool_size": settings.pool_size,
        "max_overflow": settings.max_overflow,
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    }
    if url.get_driver_name() == "asyncpg":
        options["connect_args"] = {
            "server_settings": {"application_name": "vigil-maintenance"},
            "command_timeout": 60,
        }
    return options


def _watch_slow_queries(engine: AsyncEngine, threshold_ms: int) -> None:
    """Warn about statements slower than ``threshold_ms``."""

    @event.listens_for(engine.sync_engine, "before_cursor_execute")
    def _start(conn, cursor, statement, parameters, context, executemany):
        conn.info["query_started"] = time.perf_counter()

    @event.listens_for(engine.sync_engine, "after_cursor_execute")
    def _finish(conn, cursor, statement, parameters, context, executemany):
        started = conn.info.pop("query_started", None)
        if started is None:
            return
        elapsed_ms = (time.perf_counter() - started) * 1000
        if elapsed_ms > threshold_ms:
            logger.warning(
                "Slow query",
                statement=statement[:300],
                duration_ms=round(elapsed_ms, 2),
            )


class Database:
    """Engine and session factory for one application instance."""

    def __init__(self, settings: DatabaseSettings, echo: bool = False):
        self.settings = settings
        self.echo = echo
        self._engine: AsyncEngine | None = None
        self._sessions: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call init() first.")
        return self._engine

    async def init(self) -> None:
        """Connect, verify the store answers and create missing tables.

        Tables are created only when ``settings.create_schema`` is set.

        Raises:
            RuntimeError: If the store cannot be reached.
        """
        if self._engine is not None:
            return

        url = make_url(self.settings.async_dsn)
        engine = create_async_engine(
            url,
            echo=self.echo,
            hide_parameters=True,
            **_engine_options(url, self.settings),
        )
        _watch_slow_queries(engine, self.settings.slow_query_ms)

        try:
            async with engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
                if self.settings.create_schema:
                    from db.base import Base
                    import db.models  # noqa: F401  registers the mappers

                    await conn.run_sync(Base.metadata.create_all)
        except Exception as exc:
            await engine.dispose()
            logger.error("Database unreachable", dsn=self.settings.dsn_safe, error_type=type(exc).__name__)
            raise RuntimeError(f"Failed to initialize database: {exc}") from exc

        self._engine = engine
        self._sessions = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
        logger.info(
            "Database ready",
            backend=url.get_backend_name(),
            dsn=self.settings.dsn_safe,
            schema_created=self.settings.create_schema,
        )

    async def shutdown(self) -> None:
        if self._engine is None:
            return
        engine, self._engine, self._sessions = self._engine, None, None
        await engine.dispose()
        logger.info("Database connections closed")

    def session(self) -> AsyncSession:
        """Open a new session. The caller closes it."""
        if self._sessions is None:
            raise RuntimeError("Database not initialized. Call init() first.")
        return self._sessions()

    async def health(self) -> dict[str, Any]:
        """Connectivity report for the ``/health`` route."""
        if self._engine is None:
            return {"status": "unhealthy", "error": "Database not initialized"}
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as exc:
            logger.error("Health check failed", error_type=type(exc).__name__)
            return {"status": "unhealthy", "error": type(exc).__name__}
        return {"status": "healthy"}


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Per-request session: committed when the route returns, rolled back if it raises.

    Work that must survive a later failure in the same request commits on
    its own before that failure can happen.
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def transaction(session: AsyncSession) -> AsyncGenerator[AsyncSession, None]:
    """Unit of work on ``session``: commit on success, roll back on any failure.

    Example:
        async with transaction(db):
            await db.execute(delete(SensorReading).where(...))
            await db.execute(delete(Equipment).where(...))
    """
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
