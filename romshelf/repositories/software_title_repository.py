"""Software title repository."""
import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import NotFoundError
from ..models.database import Database
from ..models.software_title import SoftwareTitle

logger = logging.getLogger(__name__)


class SoftwareTitleRepository:

    def __init__(self, db: Database):
        self.db = db

    async def add_software_title(self, name: str) -> int:
        async def _work(session: AsyncSession) -> int:
            software_title = SoftwareTitle(name=name)
            session.add(software_title)
            await session.flush()
            return software_title.id

        software_title_id = await self.db.run_in_transaction(_work)
        logger.info(f"Added software title {software_title_id} ({name})")
        return software_title_id

    async def get_software_title(self, software_title_id: int) -> SoftwareTitle:
        async def _work(session: AsyncSession) -> SoftwareTitle:
            software_title = await session.get(SoftwareTitle, software_title_id)
            if software_title is None:
                raise NotFoundError("SoftwareTitle", software_title_id)
            return software_title

        return await self.db.run(_work)

    async def get_software_titles(self) -> List[SoftwareTitle]:
        async def _work(session: AsyncSession) -> List[SoftwareTitle]:
            result = await session.execute(
                select(SoftwareTitle).order_by(SoftwareTitle.name, SoftwareTitle.id)
            )
            return list(result.scalars().all())

        return await self.db.run(_work)
