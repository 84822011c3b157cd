"""Persistence for recorded login attempts."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from sqlalchemy import delete, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.core.config import Settings
from app.core.database import create_engine, create_session_factory
from app.core.errors import StartupError, StorageError, ValidationError
from app.domain.logins.models import LoginRecord

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """Current instant as ISO-8601 with millisecond precision, e.g. 2025-01-31T12:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class LoginRecordStore:
    """Own the connection to the logins table and run its statements.

    The store is created once per process, opened with :meth:`initialize`
    and released with :meth:`close`. Every operation is a single transaction
    and nothing is retried.
    """

    def __init__(self, database_url: str, data_dir: Optional[Path] = None, echo: bool = False) -> None:
        self.database_url = database_url
        self.data_dir = data_dir
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @classmethod
    def from_settings(cls, app_settings: Settings) -> "LoginRecordStore":
        return cls(app_settings.database_url, data_dir=app_settings.DATA_DIR, echo=app_settings.DEBUG)

    async def initialize(self) -> None:
        """Open the database and create the logins table if needed.

        Safe to call on every start. Raises StartupError when the data
        directory, the database file or the schema cannot be set up.
        """
        try:
            if self.data_dir is not None:
                self.data_dir.mkdir(parents=True, exist_ok=True)
            if self._engine is None:
                self._engine = create_engine(self.database_url, echo=self._echo)
                self._sessionmaker = create_session_factory(self._engine)
            async with self._engine.begin() as conn:
                await conn.run_sync(LoginRecord.metadata.create_all, tables=[LoginRecord.__table__])
        except (OSError, SQLAlchemyError) as exc:
            raise StartupError(f"Could not open login store at {self.database_url}: {exc}") from exc

        logger.info('Table "%s" checked/created', LoginRecord.__tablename__)

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Login store closed")
        self._engine = None
        self._sessionmaker = None

    def _session(self) -> AsyncSession:
        if self._sessionmaker is None:
            raise StorageError("Login store used before initialize()")
        return self._sessionmaker()

    async def insert(self, email: Optional[str], phone: Optional[str], user_agent: Optional[str] = None) -> int:
        """Store a login attempt stamped with the current time and return its id."""
        if not email or not phone:
            raise ValidationError("email and phone are required")

        record = LoginRecord(
            email=email,
            phone=phone,
            timestamp=utc_timestamp(),
            user_agent=user_agent,
        )
        try:
            async with self._session() as session:
                session.add(record)
                await session.commit()
        except (SQLAlchemyError, UnicodeError) as exc:
            # The sqlite driver raises UnicodeEncodeError for lone surrogates.
            raise StorageError(
                f"Failed to insert login record: {exc}",
                public_message="Erro ao salvar os dados.",
            ) from exc

        logger.info("Stored login record id=%s", record.id)
        return record.id

    async def list_all(self) -> list[LoginRecord]:
        """Return every record, most recent first. Equal timestamps fall back to id descending."""
        try:
            async with self._session() as session:
                result = await session.execute(
                    select(LoginRecord).order_by(LoginRecord.timestamp.desc(), LoginRecord.id.desc())
                )
                return list(result.scalars().all())
        except SQLAlchemyError as exc:
            raise StorageError(
                f"Failed to list login records: {exc}",
                public_message="Erro ao buscar os dados.",
            ) from exc

    async def purge_all(self) -> int:
        """Delete every record and restart the id sequence. Returns the number of rows removed."""
        try:
            async with self._session() as session:
                result = await session.execute(delete(LoginRecord))
                await session.execute(
                    text("DELETE FROM sqlite_sequence WHERE name = :name"),
                    {"name": LoginRecord.__tablename__},
                )
                await session.commit()
        except SQLAlchemyError as exc:
            raise StorageError(
                f"Failed to purge login records: {exc}",
                public_message="Erro ao limpar os dados.",
            ) from exc

        removed = result.rowcount or 0
        logger.info("Purged %s login records and reset the id sequence", removed)
        return removed

    async def ping(self) -> None:
        if self._engine is None:
            raise StorageError("Login store used before initialize()")
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise StorageError(f"Login store ping failed: {exc}") from exc


__all__ = ["LoginRecordStore", "utc_timestamp"]
