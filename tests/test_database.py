"""
Tests for the shared database handle: retries, error translation, transactions.
"""
import asyncio
import sqlite3

import pytest
from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError, OperationalError

from romshelf.config import AppConfig
from romshelf.exceptions import (
    ConflictError,
    IntegrityViolationError,
    NotFoundError,
    StorageError,
)
from romshelf.models.database import Database, is_locked_error, translate_error
from romshelf.models.system import System
from tests.conftest import count_rows


def locked_error() -> OperationalError:
    return OperationalError("INSERT INTO setting", {}, sqlite3.OperationalError("database is locked"))


class TestErrorTranslation:
    """Test mapping of SQLAlchemy errors onto the romshelf taxonomy."""

    def test_unique_violation_is_conflict(self):
        error = IntegrityError(
            "INSERT", {}, sqlite3.IntegrityError("UNIQUE constraint failed: setting.key")
        )
        assert isinstance(translate_error(error), ConflictError)

    def test_foreign_key_violation_is_integrity_error(self):
        error = IntegrityError("INSERT", {}, sqlite3.IntegrityError("FOREIGN KEY constraint failed"))
        assert isinstance(translate_error(error), IntegrityViolationError)

    def test_operational_error_is_storage_error(self):
        error = OperationalError("SELECT", {}, sqlite3.OperationalError("disk I/O error"))
        translated = translate_error(error)
        assert isinstance(translated, StorageError)
        assert "disk I/O error" in translated.message

    def test_not_found_message(self):
        assert NotFoundError("System", 3).message == "System 3 not found"
        assert NotFoundError("Setting", "x", "No such setting").message == "No such setting"
        assert NotFoundError("Setting", "x", None).message == "Setting 'x' not found"

    def test_is_locked_error(self):
        assert is_locked_error(locked_error()) is True
        assert is_locked_error(
            OperationalError("SELECT", {}, sqlite3.OperationalError("no such table: x"))
        ) is False
        assert is_locked_error(ValueError("database is locked")) is False


class TestLockRetry:
    """Test bounded retry of units of work that hit a locked database."""

    @pytest.mark.asyncio
    async def test_retries_until_unlocked(self, database):
        attempts = []

        async def _work(session):
            attempts.append(1)
            if len(attempts) < 3:
                raise locked_error()
            return "done"

        assert await database.run_in_transaction(_work) == "done"
        assert len(attempts) == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_retry_attempts(self):
        db = Database("sqlite+aiosqlite:///:memory:", retry_attempts=3, retry_delay=0)
        attempts = []

        async def _work(session):
            attempts.append(1)
            raise locked_error()

        try:
            with pytest.raises(StorageError):
                await db.run(_work)
        finally:
            await db.dispose()

        assert len(attempts) == 3

    @pytest.mark.asyncio
    async def test_other_operational_errors_are_not_retried(self, database):
        attempts = []

        async def _work(session):
            attempts.append(1)
            raise OperationalError("SELECT", {}, sqlite3.OperationalError("no such table: x"))

        with pytest.raises(StorageError):
            await database.run(_work)

        assert len(attempts) == 1

    @pytest.mark.asyncio
    async def test_domain_errors_pass_through(self, database):
        async def _work(session):
            raise NotFoundError("System", 1)

        with pytest.raises(NotFoundError):
            await database.run_in_transaction(_work)


class TestTransactions:
    """Test commit, rollback and cancellation of units of work."""

    @pytest.mark.asyncio
    async def test_commit_on_success(self, database):
        async def _work(session):
            await session.execute(insert(System.__table__).values(name="Commodore 64"))

        await database.run_in_transaction(_work)

        assert await count_rows(database, System.__table__) == 1

    @pytest.mark.asyncio
    async def test_rollback_on_error(self, database):
        async def _work(session):
            await session.execute(insert(System.__table__).values(name="Commodore 64"))
            raise NotFoundError("Release", 1)

        with pytest.raises(NotFoundError):
            await database.run_in_transaction(_work)

        assert await count_rows(database, System.__table__) == 0

    @pytest.mark.asyncio
    async def test_rollback_on_cancellation(self, database):
        """Test that cancelling a task mid-transaction commits nothing."""
        inserted = asyncio.Event()

        async def _work(session):
            await session.execute(insert(System.__table__).values(name="Commodore 64"))
            inserted.set()
            await asyncio.sleep(3600)

        task = asyncio.create_task(database.run_in_transaction(_work))
        await inserted.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert await count_rows(database, System.__table__) == 0


    @pytest.mark.asyncio
    async def test_in_memory_units_of_work_take_turns(self, database):
        """Test that a rollback on the shared in-memory connection leaves a peer's commit alone."""
        committed_started = asyncio.Event()

        async def _commits(session):
            await session.execute(insert(System.__table__).values(name="Commodore 64"))
            committed_started.set()
            await asyncio.sleep(0)
            await session.execute(insert(System.__table__).values(name="Amiga 500"))

        async def _fails(session):
            await session.execute(insert(System.__table__).values(name="Atari ST"))
            raise NotFoundError("Release", 1)

        async def _fails_after_start():
            await committed_started.wait()
            await database.run_in_transaction(_fails)

        results = await asyncio.gather(
            database.run_in_transaction(_commits),
            _fails_after_start(),
            return_exceptions=True
        )

        assert results[0] is None
        assert isinstance(results[1], NotFoundError)
        assert await count_rows(database, System.__table__) == 2
        assert await count_rows(database, System.__table__, name="Atari ST") == 0


class TestDatabaseSetup:
    """Test engine construction."""

    @pytest.mark.asyncio
    async def test_foreign_keys_enabled(self, database):
        async def _pragma(session):
            connection = await session.connection()
            result = await connection.exec_driver_sql("PRAGMA foreign_keys")
            return result.scalar()

        assert await database.run(_pragma) == 1

    @pytest.mark.asyncio
    async def test_from_config_creates_database_directory(self, tmp_path):
        db_path = tmp_path / "nested" / "romshelf.db"
        config = AppConfig(
            database_url=f"sqlite:///{db_path}",
            lock_retry_attempts=2,
            lock_retry_delay=0.5
        )

        db = Database.from_config(config)
        try:
            await db.create_all()
            assert db.retry_attempts == 2
            assert db.retry_delay == 0.5
            assert db_path.exists()
        finally:
            await db.dispose()
