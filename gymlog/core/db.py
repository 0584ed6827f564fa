from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import Request
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from gymlog.core.errors import GymLogError, StoreError

logger = structlog.get_logger(__name__)


class Base(DeclarativeBase):
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Store:
    """Engine and session factory for one database, opened at startup."""

    def __init__(self, database_url: str, *, echo: bool = False) -> None:
        self.database_url = database_url
        self.engine: AsyncEngine = create_async_engine(database_url, echo=echo)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            expire_on_commit=False,
            class_=AsyncSession,
        )

    async def open(self, *, seed: bool = True) -> None:
        # Import models so their tables are registered on Base.metadata
        from gymlog.models import exercise, workout, workout_exercise  # noqa: F401
        from gymlog.seed import seed_exercises

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("store_opened", dialect=self.engine.dialect.name)

        if seed:
            async with self.transaction() as db:
                await seed_exercises(db)

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("store_closed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Read-only session; nothing is committed."""
        async with self.session_factory() as db:
            try:
                yield db
            except GymLogError:
                raise
            except SQLAlchemyError as e:
                logger.exception("store_read_failed")
                raise StoreError("Database error") from e

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Commits on clean exit, rolls back on any exception."""
        async with self.session_factory() as db:
            try:
                async with db.begin():
                    yield db
            except GymLogError:
                raise
            except SQLAlchemyError as e:
                logger.exception("store_write_failed")
                raise StoreError("Database error") from e


def get_store(request: Request) -> Store:
    return request.app.state.store
