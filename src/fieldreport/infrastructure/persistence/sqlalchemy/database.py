"""Engine and session management for the local SQLite database."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

# Import models to register with Base.metadata
import fieldreport.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from fieldreport.infrastructure.persistence.sqlalchemy.models.base import Base

logger = logging.getLogger(__name__)


class Database:
    """One shared async engine plus a session factory.

    Each unit of work gets its own session from ``session()``; the
    session commits when the block exits cleanly and rolls back otherwise.
    """

    def __init__(self, database_url: str, echo: bool = False):
        self._database_url = database_url
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._session_maker: async_sessionmaker[AsyncSession] | None = None

    @property
    def url(self) -> str:
        return self._database_url

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> None:
        if self._engine is not None:
            return
        self._ensure_sqlite_directory()
        self._engine = create_async_engine(self._database_url, echo=self._echo)
        self._session_maker = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.debug("Database engine created for %s", self._display_url())

    async def create_tables(self) -> None:
        """
        Create all database tables (idempotent).

        Uses SQLAlchemy's create_all() which only creates missing tables.
        Existing tables and their data are never modified or deleted.
        """
        self.open()
        assert self._engine is not None
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema is up to date (%s)", self._display_url())

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        self.open()
        assert self._session_maker is not None
        async with self._session_maker() as session:
            try:
                yield session
                await session.commit()
            except BaseException:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_maker = None

    def _ensure_sqlite_directory(self) -> None:
        url = make_url(self._database_url)
        if not url.get_backend_name().startswith("sqlite"):
            return
        database = url.database
        if not database or database == ":memory:":
            return
        Path(database).expanduser().parent.mkdir(parents=True, exist_ok=True)

    def _display_url(self) -> str:
        url = self._database_url
        return url.split("@")[-1] if "@" in url else url
