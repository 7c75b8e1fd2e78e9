"""
Intent ledger database: engine lifecycle and transactional sessions.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from passerelle.domain.exceptions import StoreError
from passerelle.infrastructure.persistence.models import Base

APPLICATION_NAME = "passerelle"


class Database:
    """
    Owns the async engine behind the intent ledger.

    Production runs on PostgreSQL through asyncpg with a bounded pool.
    SQLite URLs (aiosqlite) skip pool options and are used by tests and
    local runs.
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 5,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
    ):
        """
        Args:
            database_url: Async SQLAlchemy URL
            echo: Log emitted SQL
            pool_size: Persistent pooled connections (PostgreSQL only)
            max_overflow: Extra connections allowed under load
            pool_timeout: Seconds to wait for a free connection
            pool_recycle: Connection lifetime in seconds
        """
        self.database_url = database_url
        self.echo = echo
        self.pool_options = {
            "pool_size": pool_size,
            "max_overflow": max_overflow,
            "pool_timeout": pool_timeout,
            "pool_recycle": pool_recycle,
            "pool_pre_ping": True,
        }
        self._engine: Optional[AsyncEngine] = None
        self._sessions: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    def _engine_options(self) -> dict[str, Any]:
        if self.is_sqlite:
            return {"echo": self.echo}
        return {
            "echo": self.echo,
            **self.pool_options,
            "connect_args": {
                "server_settings": {"application_name": APPLICATION_NAME}
            },
        }

    def _require_engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Ledger database is not connected; call connect() first")
        return self._engine

    async def connect(self) -> None:
        """Create the engine and session factory (no-op when connected)."""
        if self.is_connected:
            return

        self._engine = create_async_engine(self.database_url, **self._engine_options())
        self._sessions = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def disconnect(self) -> None:
        """Dispose of the engine and its pooled connections."""
        if not self.is_connected:
            return

        engine, self._engine, self._sessions = self._engine, None, None
        await engine.dispose()

    async def create_tables(self) -> None:
        """Create missing ledger tables; schema changes are not migrated."""
        async with self._require_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Unit of work over the ledger.

        The body's writes are committed together when it exits normally
        and rolled back when it raises.

        Yields:
            AsyncSession bound to this database

        Raises:
            StoreError: If the commit fails
        """
        self._require_engine()

        async with self._sessions() as session:
            try:
                yield session
            except BaseException:
                await session.rollback()
                raise

            try:
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise StoreError(
                    f"Failed to commit ledger changes: {e}",
                    code="COMMIT_FAILED",
                ) from e

    async def health_check(self) -> bool:
        """True when a trivial query round-trips."""
        if not self.is_connected:
            return False

        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
        except (SQLAlchemyError, StoreError, OSError):
            return False
        return True
