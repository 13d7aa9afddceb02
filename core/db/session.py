from typing import Any, AsyncGenerator, Dict

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from core.config import config


def engine_options(database_url: str) -> Dict[str, Any]:
    """Engine keyword arguments for the backend named in ``database_url``.

    PostgreSQL (asyncpg) gets a sized, pre-pinged pool. SQLite (aiosqlite),
    used for local development and tests, opens a fresh connection per
    session instead of pooling.
    """
    options: Dict[str, Any] = {"echo": config.DATABASE_ECHO}

    backend = make_url(database_url).get_backend_name()
    if backend == "postgresql":
        options.update(
            pool_size=config.DATABASE_POOL_SIZE,
            max_overflow=config.DATABASE_MAX_OVERFLOW,
            pool_recycle=3600,
            pool_pre_ping=True,
        )
    elif backend == "sqlite":
        options.update(
            connect_args={"check_same_thread": False},
            poolclass=NullPool,
        )

    return options


engine = create_async_engine(config.DATABASE_URL, **engine_options(config.DATABASE_URL))


if engine.dialect.name == "sqlite":

    @event.listens_for(engine.sync_engine, "connect")
    def enable_sqlite_foreign_keys(dbapi_conn, connection_record):
        # ON DELETE CASCADE from organizations relies on this
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session; routers hand it to the service classes."""
    async with async_session_factory() as session:
        yield session
