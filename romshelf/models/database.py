"""
Database configuration with SQLite.
Async with SQLAlchemy 2.0 and aiosqlite.

A single Database handle owns the engine and the session factory; it is
created once by the caller and passed to every repository.
"""
import asyncio
import logging
from contextlib import nullcontext
from pathlib import Path
from typing import Awaitable, Callable, TypeVar

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from ..config import AppConfig
from ..exceptions import (
    ConflictError,
    DatabaseError,
    IntegrityViolationError,
    StorageError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

LOCKED_MESSAGES = ("database is locked", "database table is locked", "database is busy")


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def _enable_foreign_keys(dbapi_connection, connection_record):
    """SQLite leaves foreign key enforcement off unless asked per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _is_memory_url(url: str) -> bool:
    return make_url(url).database in (None, "", ":memory:")


def is_locked_error(exc: BaseException) -> bool:
    """True for the transient errors SQLite raises while another writer holds the lock."""
    if not isinstance(exc, OperationalError):
        return False
    detail = str(exc.orig).lower()
    return any(message in detail for message in LOCKED_MESSAGES)


def translate_error(exc: SQLAlchemyError) -> DatabaseError:
    """Map a SQLAlchemy error onto the romshelf error taxonomy."""
    if isinstance(exc, IntegrityError):
        detail = str(exc.orig)
        if "UNIQUE constraint failed" in detail or "PRIMARY KEY" in detail:
            return ConflictError(detail)
        return IntegrityViolationError(detail)
    if isinstance(exc, DBAPIError):
        return StorageError(str(exc.orig))
    return StorageError(str(exc))


class Database:
    """
    Shared handle to the embedded database.

    Repositories call run() for reads and run_in_transaction() for writes.
    Both retry units of work that fail on a locked database and translate
    engine errors into romshelf exceptions.
    """

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        busy_timeout: float = 5.0,
        retry_attempts: int = 5,
        retry_delay: float = 0.05
    ):
        self.url = url
        self.retry_attempts = max(1, retry_attempts)
        self.retry_delay = retry_delay
        # StaticPool shares one connection, so units of work must take turns on it
        self._connection_lock = None

        connect_args = {"timeout": busy_timeout}
        engine_kwargs = {"echo": echo}
        if _is_memory_url(url):
            # Single connection for in-memory DB, otherwise each connection sees an empty database
            connect_args["check_same_thread"] = False
            engine_kwargs["poolclass"] = StaticPool
            self._connection_lock = asyncio.Lock()
        else:
            database_path = make_url(url).database
            Path(database_path).parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_async_engine(url, connect_args=connect_args, **engine_kwargs)
        event.listen(self.engine.sync_engine, "connect", _enable_foreign_keys)

        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False
        )

    @classmethod
    def from_config(cls, config: AppConfig) -> "Database":
        return cls(
            config.database_url,
            echo=config.debug,
            busy_timeout=config.busy_timeout,
            retry_attempts=config.lock_retry_attempts,
            retry_delay=config.lock_retry_delay
        )

    async def create_all(self) -> None:
        """Create every table known to the models (used for fresh and test databases)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Database schema ready at {self.url}")

    async def dispose(self) -> None:
        await self.engine.dispose()

    async def run(self, work: Callable[[AsyncSession], Awaitable[T]]) -> T:
        """Run a read-only unit of work in its own session."""
        return await self._run_with_retry(work, transactional=False)

    async def run_in_transaction(self, work: Callable[[AsyncSession], Awaitable[T]]) -> T:
        """
        Run a unit of work inside one transaction.

        Commits when work returns, rolls back on any exception (cancellation
        included), so callers never observe a partial write.
        """
        return await self._run_with_retry(work, transactional=True)

    async def _run_with_retry(
        self,
        work: Callable[[AsyncSession], Awaitable[T]],
        transactional: bool
    ) -> T:
        attempt = 0
        while True:
            attempt += 1
            guard = self._connection_lock if self._connection_lock is not None else nullcontext()
            try:
                async with guard:
                    async with self.session_factory() as session:
                        if transactional:
                            async with session.begin():
                                return await work(session)
                        return await work(session)

            except DatabaseError:
                raise

            except OperationalError as e:
                if is_locked_error(e) and attempt < self.retry_attempts:
                    delay = self.retry_delay * (2 ** (attempt - 1))
                    logger.warning(
                        f"Database locked (attempt {attempt}/{self.retry_attempts}), "
                        f"retrying in {delay:.2f}s"
                    )
                    await asyncio.sleep(delay)
                    continue
                logger.error(f"Storage error after {attempt} attempt(s): {e.orig}")
                raise translate_error(e) from e

            except SQLAlchemyError as e:
                error = translate_error(e)
                logger.warning(f"{type(error).__name__}: {error.message}")
                raise error from e
