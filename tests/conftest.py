"""
Pytest configuration and shared fixtures.

Provides:
- Database fixtures (in-memory SQLite, fresh schema per test)
- Repository manager and view-model service built on it
- Helpers to seed rows and count table contents
"""
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.sql.schema import Table

from romshelf.models.database import Database
from romshelf.repositories.repository_manager import RepositoryManager
from romshelf.services.view_model_service import ViewModelService


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest_asyncio.fixture(scope="function")
async def database() -> AsyncGenerator[Database, None]:
    """
    In-memory SQLite database for each test function.
    Tables are created fresh for each test.
    """
    db = Database("sqlite+aiosqlite:///:memory:", retry_delay=0)
    await db.create_all()

    yield db

    await db.dispose()


@pytest_asyncio.fixture(scope="function")
async def file_database(tmp_path) -> AsyncGenerator[Database, None]:
    """File-backed database, for tests that need several real connections."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'romshelf.db'}", retry_delay=0)
    await db.create_all()

    yield db

    await db.dispose()


@pytest.fixture
def repository_manager(database: Database) -> RepositoryManager:
    return RepositoryManager(database)


@pytest.fixture
def view_model_service(repository_manager: RepositoryManager) -> ViewModelService:
    return ViewModelService(repository_manager)


# =============================================================================
# HELPERS
# =============================================================================

async def count_rows(db: Database, table: Table, **filters) -> int:
    """Count rows of a table, optionally filtered by column equality."""
    async def _work(session):
        statement = select(func.count()).select_from(table)
        for column, value in filters.items():
            statement = statement.where(table.c[column] == value)
        return await session.scalar(statement)

    return await db.run(_work)


async def execute(db: Database, statement) -> None:
    """Execute one statement in its own transaction."""
    async def _work(session):
        await session.execute(statement)

    await db.run_in_transaction(_work)
