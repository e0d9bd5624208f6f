"""Database configuration and connection management."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.config import settings


def to_async_url(url: str) -> str:
    """Map a plain connection string onto its async driver."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def is_sqlite(url: str) -> bool:
    """Check whether a connection string points at SQLite."""
    return url.startswith("sqlite")


def set_sqlite_pragma(dbapi_conn: Any, connection_record: Any) -> None:
    """Turn on foreign key enforcement for SQLite connections."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, **kwargs: Any) -> AsyncEngine:
    """Create an async engine, with SQLite foreign keys enforced."""
    async_url = to_async_url(url)
    async_engine = create_async_engine(async_url, **kwargs)
    if is_sqlite(async_url):
        event.listen(async_engine.sync_engine, "connect", set_sqlite_pragma)
    return async_engine


DATABASE_URL = to_async_url(settings.database_url)

# Connection pooling only applies to server databases
_engine_options: dict[str, Any] = {"echo": settings.debug, "pool_pre_ping": True}
if not is_sqlite(DATABASE_URL):
    _engine_options.update(
        pool_size=10,
        max_overflow=20,
        pool_recycle=3600,
        connect_args={
            "server_settings": {
                "application_name": settings.app_name,
            },
        },
    )

engine: AsyncEngine = build_engine(DATABASE_URL, **_engine_options)

# Async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def check_database_connection(session: AsyncSession) -> bool:
    """Check if database connection is healthy."""
    try:
        await session.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
