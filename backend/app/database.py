"""
NoteShare Backend — Database Engine, Schema Lifecycle and Sessions
====================================================================

What:  Async SQLAlchemy engine, session factory, schema bootstrap and the
       FastAPI dependencies that hand a database to route handlers.
How:   One `Database` object per service owns a bounded connection pool.
       Services open a short-lived session per operation; a session is a
       transaction that commits on success and rolls back on any error.
Who:   Used by services (sessions), repositories (queries) and main.py
       (startup/shutdown).
When:  Engines are created at import; files and schema are created in the
       application lifespan via `Database.init()`.

Schema policy (per service, see config.py):
    reset_schema=True   drop every table, then create it again
    reset_schema=False  create missing tables only (data survives restarts)

SQLite notes:
    - Foreign keys are OFF by default in SQLite; every pooled connection
      runs `PRAGMA foreign_keys = ON` so ON DELETE CASCADE / SET NULL hold.
    - In-memory URLs use SQLAlchemy's static pool, so no pool sizing.
"""

import logging
from contextlib import asynccontextmanager
from datetime import timezone
from pathlib import Path
from typing import Any, AsyncIterator, Dict, Optional, Sequence

from sqlalchemy import DateTime, TypeDecorator, event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import settings
from app.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all ORM models; shares one metadata object."""
    pass


class UTCDateTime(TypeDecorator):
    """
    Timestamp column that always round-trips as an aware UTC datetime.

    SQLite has no timezone storage: values are written as naive UTC and
    tagged with UTC again when read.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


BOARD_TABLES = ("accounts", "groups", "group_users", "notes", "note_shares")
SUMMARY_TABLES = ("summaries",)


def db_file_path_from_url(database_url: str) -> Optional[Path]:
    """
    Resolve the on-disk file behind a SQLite URL.

    Returns None for in-memory databases and for non-SQLite backends.

    >>> db_file_path_from_url("sqlite+aiosqlite:///./data/app.db")
    PosixPath('data/app.db')
    >>> db_file_path_from_url("sqlite+aiosqlite:///:memory:") is None
    True
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return None
    database = url.database
    if not database or database == ":memory:" or url.query.get("mode") == "memory":
        return None
    return Path(database)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


class Database:
    """
    Connection pool + schema owner for one service.

    Attributes:
        name:          Label used in logs ("board", "summaries").
        url:           SQLAlchemy async URL.
        table_names:   Tables this service owns inside `Base.metadata`.
        reset_schema:  Drop-and-recreate on init when True.
    """

    def __init__(
        self,
        url: str,
        table_names: Sequence[str],
        reset_schema: bool,
        name: str = "default",
        pool_size: Optional[int] = None,
    ):
        self.name = name
        self.url = url
        self.table_names = tuple(table_names)
        self.reset_schema = reset_schema

        engine_kwargs = {"echo": settings.log_level == "DEBUG"}
        if db_file_path_from_url(url) is not None:
            # Bounded pool: at most pool_size connections, no overflow
            engine_kwargs["pool_size"] = pool_size or settings.db_pool_size
            engine_kwargs["max_overflow"] = 0
        self.engine = create_async_engine(url, **engine_kwargs)

        if make_url(url).get_backend_name() == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @property
    def file_path(self) -> Optional[Path]:
        return db_file_path_from_url(self.url)

    def storage_info(self) -> Dict[str, Any]:
        """URL, resolved file path, and file presence/size for /api/debug."""
        path = self.file_path
        info: Dict[str, Any] = {
            "database_url": self.url,
            "db_file_path": str(path) if path is not None else None,
            "file_exists": False,
            "file_size": None,
        }
        if path is not None and path.is_file():
            info["file_exists"] = True
            info["file_size"] = path.stat().st_size
        return info

    def _ensure_file(self) -> None:
        """Create parent directories and an empty database file if missing."""
        path = self.file_path
        if path is None:
            return
        if str(path.parent) not in ("", "."):
            path.parent.mkdir(parents=True, exist_ok=True)
        if not path.exists():
            path.touch()
            logger.info("[%s] Created empty database file: %s", self.name, path.resolve())

    async def init(self) -> None:
        """
        Prepare storage: ensure the backing file exists and establish schema.

        Raises:
            DatabaseError: the file could not be created or DDL failed.
        """
        # Registers every model with Base.metadata
        import app.models  # noqa: F401

        try:
            self._ensure_file()
        except OSError as e:
            raise DatabaseError(
                message="Could not prepare the database file.",
                context={"database": self.name, "os_error": str(e)},
            ) from e

        tables = [Base.metadata.tables[name] for name in self.table_names]
        try:
            async with self.engine.begin() as conn:
                if self.reset_schema:
                    logger.warning(
                        "[%s] Dropping and recreating tables %s; existing data is discarded",
                        self.name,
                        ", ".join(self.table_names),
                    )
                    await conn.run_sync(Base.metadata.drop_all, tables=tables)
                await conn.run_sync(Base.metadata.create_all, tables=tables)
        except SQLAlchemyError as e:
            logger.error("[%s] Schema setup failed: %s", self.name, str(e))
            raise DatabaseError(
                message="Could not initialise the database schema.",
                context={"database": self.name, "error_type": type(e).__name__},
            ) from e

        logger.info("[%s] Database ready at %s", self.name, self.url)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provide a transactional session.

        Commits when the block exits normally, rolls back on any exception,
        and always returns the connection to the pool. Driver-level faults
        are re-raised as `DatabaseError`; application errors pass through.

        Example:
            async with db.session() as session:
                account = await account_repository.get(session, 1)
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("[%s] Database error: %s", self.name, str(e))
                raise DatabaseError(
                    context={"database": self.name, "error_type": type(e).__name__},
                ) from e
            except Exception:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        """Close all pooled connections (application shutdown)."""
        await self.engine.dispose()


# ── Service databases ─────────────────────────────────────────────────────
board_db = Database(
    settings.database_url,
    table_names=BOARD_TABLES,
    reset_schema=settings.board_reset_schema,
    name="board",
)

summary_db = Database(
    settings.summary_database_url,
    table_names=SUMMARY_TABLES,
    reset_schema=settings.summary_reset_schema,
    name="summaries",
)


# ── FastAPI dependencies ──────────────────────────────────────────────────
# Tests override these with `app.dependency_overrides`.
def get_board_db() -> Database:
    return board_db


def get_summary_db() -> Database:
    return summary_db
