"""Async SQLAlchemy engine, session factory, and declarative base.

The engine is created once per application (see ``hoteldesk.main.lifespan``)
and kept on ``app.state``; request handlers receive sessions through the
``get_db`` / ``get_session_factory`` dependencies rather than a module-level
engine.
"""

from collections.abc import AsyncIterator
from datetime import datetime

from fastapi import Request
from sqlalchemy import event, func
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from hoteldesk.config import Settings


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class CreatedAtMixin:
    """Mixin that adds a created_at column."""

    created_at: Mapped[datetime] = mapped_column(server_default=func.current_timestamp())


class IntPrimaryKeyMixin:
    """Mixin that adds an autoincrement integer primary key."""

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)


def _install_sqlite_pragmas(engine: AsyncEngine, busy_timeout_seconds: float) -> None:
    """WAL journal, relaxed fsync, bounded lock wait and FK enforcement on every connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ARG001
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.execute(f"PRAGMA busy_timeout={int(busy_timeout_seconds * 1000)}")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Build the process-wide engine (connection pool) for the configured database."""
    if settings.is_sqlite:
        engine = create_async_engine(
            settings.async_database_url,
            echo=settings.debug,
            connect_args={"timeout": settings.db_busy_timeout_seconds},
        )
        _install_sqlite_pragmas(engine, settings.db_busy_timeout_seconds)
        return engine

    return create_async_engine(
        settings.async_database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        pool_timeout=settings.db_busy_timeout_seconds,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    """Return the application's session factory.

    Used by services that own their transaction boundaries (checkout).
    """
    return request.app.state.session_factory


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Yield an async database session for FastAPI dependency injection.

    The session commits when the handler returns and rolls back if it raises.

    Usage::

        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
