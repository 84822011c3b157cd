from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

# Base class for models
Base = declarative_base()


def _set_sqlite_pragma(dbapi_connection, connection_record):  # type: ignore[arg-type]
    cursor = dbapi_connection.cursor()
    pragmas = (
        text("PRAGMA journal_mode=WAL"),
        text("PRAGMA synchronous=NORMAL"),
        text("PRAGMA busy_timeout=5000"),
    )

    for pragma in pragmas:
        cursor.execute(pragma.text)
        if pragma.text.startswith("PRAGMA journal_mode"):
            cursor.fetchone()
    cursor.close()


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine holding a single pooled connection.

    Every caller shares that one connection, so statements are serialized
    and each transaction is atomic with respect to the others.
    """
    engine = create_async_engine(
        database_url,
        echo=echo,
        pool_size=1,
        max_overflow=0,
        future=True,
    )

    if make_url(database_url).get_backend_name() == "sqlite":
        event.listen(engine.sync_engine, "connect", _set_sqlite_pragma)

    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


__all__ = ["Base", "create_engine", "create_session_factory"]
