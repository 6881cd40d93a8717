"""
Setting repository: generic key -> value string store.
"""
import logging
from typing import Dict

from sqlalchemy import select, update
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import NotFoundError
from ..models.database import Database
from ..models.setting import Setting

logger = logging.getLogger(__name__)


class SettingRepository:
    """Reads and writes rows of the setting table."""

    def __init__(self, db: Database):
        self.db = db

    async def get_settings(self) -> Dict[str, str]:
        async def _work(session: AsyncSession) -> Dict[str, str]:
            result = await session.execute(select(Setting.key, Setting.value))
            return {key: value for key, value in result.all()}

        return await self.db.run(_work)

    async def get_setting(self, key: str) -> str:
        async def _work(session: AsyncSession) -> str:
            result = await session.execute(select(Setting.value).where(Setting.key == key))
            value = result.scalar_one_or_none()
            if value is None:
                raise NotFoundError("Setting", key)
            return value

        return await self.db.run(_work)

    async def add_setting(self, key: str, value: str) -> None:
        """Insert a new setting. Raises ConflictError if the key already exists."""
        async def _work(session: AsyncSession) -> None:
            session.add(Setting(key=key, value=value))
            await session.flush()

        await self.db.run_in_transaction(_work)
        logger.debug(f"Added setting {key}")

    async def update_setting(self, key: str, value: str) -> None:
        """Update a setting by key. A missing key is not an error; nothing is written."""
        async def _work(session: AsyncSession) -> int:
            result = await session.execute(
                update(Setting)
                .where(Setting.key == key)
                .values(value=value)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount

        updated = await self.db.run_in_transaction(_work)
        if not updated:
            logger.debug(f"Update of unknown setting {key} matched no rows")

    async def add_or_update_setting(self, key: str, value: str) -> None:
        """Insert or overwrite a setting in a single statement."""
        async def _work(session: AsyncSession) -> None:
            statement = insert(Setting).values(key=key, value=value)
            await session.execute(
                statement.on_conflict_do_update(
                    index_elements=[Setting.key],
                    set_={"value": statement.excluded.value}
                )
            )

        await self.db.run_in_transaction(_work)
        logger.debug(f"Stored setting {key}")
