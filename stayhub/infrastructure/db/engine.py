"""
Async engine factory for the reservations database.

SQLite (aiosqlite) is the development/test driver. Its DBAPI driver does not
emit BEGIN before a SELECT and SQLite ignores SELECT ... FOR UPDATE, so the
engine takes over transaction control and opens every transaction with
BEGIN IMMEDIATE: the write lock is held from the first read, and two
processes sharing the file cannot both pass the overlap re-check.
Server databases (MySQL, PostgreSQL) rely on the row lock instead.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from stayhub.config import Settings

logger = logging.getLogger(__name__)


def is_sqlite_url(database_url: str) -> bool:
    return make_url(database_url).get_backend_name() == "sqlite"


def _use_immediate_transactions(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        # El driver deja de abrir transacciones por su cuenta
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(settings: Settings) -> AsyncEngine:
    if not settings.database_url:
        raise RuntimeError("DATABASE_URL is required for SQL mode")

    if is_sqlite_url(settings.database_url):
        engine = create_async_engine(
            settings.database_url,
            connect_args={"timeout": settings.sqlite_busy_timeout_seconds},
        )
        _use_immediate_transactions(engine)
        logger.info(
            "SQLite engine configured with BEGIN IMMEDIATE transactions",
            extra={"busy_timeout_seconds": settings.sqlite_busy_timeout_seconds},
        )
        return engine

    return create_async_engine(
        settings.database_url,
        pool_pre_ping=True,
        pool_recycle=settings.db_pool_recycle_seconds,
    )


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@asynccontextmanager
async def session_scope(session_maker) -> AsyncIterator[AsyncSession]:
    """Una transacción por bloque: commit al salir, rollback ante error."""
    async with session_maker() as session:
        async with session.begin():
            yield session
