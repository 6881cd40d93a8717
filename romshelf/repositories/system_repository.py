"""
System repository with in-use detection across release_system and emulator_system.
"""
import logging
from typing import List, Set

from sqlalchemy import and_, delete, exists, func, select, union
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import NotFoundError, SystemInUseError
from ..models.database import Database
from ..models.emulator import EmulatorSystem
from ..models.release import release_system
from ..models.system import System

logger = logging.getLogger(__name__)


class SystemRepository:

    def __init__(self, db: Database):
        self.db = db

    async def get_system(self, system_id: int) -> System:
        async def _work(session: AsyncSession) -> System:
            system = await session.get(System, system_id)
            if system is None:
                raise NotFoundError("System", system_id)
            return system

        return await self.db.run(_work)

    async def get_systems(self) -> List[System]:
        async def _work(session: AsyncSession) -> List[System]:
            result = await session.execute(select(System).order_by(System.name, System.id))
            return list(result.scalars().all())

        return await self.db.run(_work)

    async def is_system_in_use(self, system_id: int) -> bool:
        """True when any release or emulator references the system."""
        async def _work(session: AsyncSession) -> bool:
            releases_count = await session.scalar(
                select(func.count())
                .select_from(release_system)
                .where(release_system.c.system_id == system_id)
            )
            emulators_count = await session.scalar(
                select(func.count())
                .select_from(EmulatorSystem)
                .where(EmulatorSystem.system_id == system_id)
            )
            return releases_count > 0 or emulators_count > 0

        return await self.db.run(_work)

    async def get_systems_in_use(self) -> Set[int]:
        """Ids of every system referenced by a release or an emulator, in one query."""
        async def _work(session: AsyncSession) -> Set[int]:
            result = await session.execute(
                union(
                    select(release_system.c.system_id),
                    select(EmulatorSystem.system_id)
                )
            )
            return set(result.scalars().all())

        return await self.db.run(_work)

    async def add_system(self, name: str) -> int:
        async def _work(session: AsyncSession) -> int:
            system = System(name=name)
            session.add(system)
            await session.flush()
            return system.id

        system_id = await self.db.run_in_transaction(_work)
        logger.info(f"Added system {system_id} ({name})")
        return system_id

    async def update_system(self, system_id: int, name: str) -> int:
        async def _work(session: AsyncSession) -> int:
            system = await session.get(System, system_id)
            if system is None:
                raise NotFoundError("System", system_id)
            system.name = name
            return system.id

        return await self.db.run_in_transaction(_work)

    async def delete_system(self, system_id: int) -> None:
        """
        Delete a system unless it is in use.

        The in-use check is part of the DELETE statement itself, so no
        release or emulator can start referencing the system in between.
        """
        async def _work(session: AsyncSession) -> None:
            result = await session.execute(
                delete(System).where(
                    and_(
                        System.id == system_id,
                        ~exists().where(release_system.c.system_id == system_id),
                        ~exists().where(EmulatorSystem.system_id == system_id)
                    )
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount:
                return
            if await session.get(System, system_id) is None:
                raise NotFoundError("System", system_id)
            raise SystemInUseError(system_id)

        await self.db.run_in_transaction(_work)
        logger.info(f"Deleted system {system_id}")
