"""Database connection and session management."""

from collections.abc import AsyncGenerator
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from gdms.config import settings


def get_engine_url_and_connect_args(url: str) -> tuple[str, dict]:
    """Strip sslmode from URL (asyncpg doesn't accept it) and request SSL via connect_args instead."""
    connect_args = {}
    if "sslmode=" in url or "ssl=" in url:
        parsed = urlparse(url)
        query = parse_qs(parsed.query)
        sslmode = (query.pop("sslmode", None) or query.pop("ssl", None) or [""])[0]
        new_query = urlencode(query, doseq=True)
        url = urlunparse(parsed._replace(query=new_query))
        if sslmode and sslmode != "disable":
            connect_args["ssl"] = "require"
    return url, connect_args


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, **kwargs) -> AsyncEngine:
    """
    Create an async engine.

    SQLite only honours ON DELETE CASCADE / SET NULL with the foreign_keys
    pragma switched on for every connection.
    """
    url, connect_args = get_engine_url_and_connect_args(url)
    connect_args.update(kwargs.pop("connect_args", {}))
    engine = create_async_engine(url, connect_args=connect_args, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


engine = build_engine(
    settings.database_url,
    echo=settings.log_level == "DEBUG",
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for database sessions."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
