"""
Emulator repository: emulators and their per-system launch arguments.
"""
import logging
from dataclasses import dataclass
from typing import List, Tuple

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import NotFoundError
from ..models.database import Database
from ..models.emulator import Emulator, EmulatorSystem
from ..models.system import System

logger = logging.getLogger(__name__)


@dataclass
class EmulatorSystemAssociation:
    """One emulator_system row joined with the system name."""
    system_id: int
    system_name: str
    arguments: str


class EmulatorRepository:

    def __init__(self, db: Database):
        self.db = db

    async def add_emulator(self, name: str, executable: str, extract_files: bool) -> int:
        async def _work(session: AsyncSession) -> int:
            emulator = Emulator(name=name, executable=executable, extract_files=extract_files)
            session.add(emulator)
            await session.flush()
            return emulator.id

        emulator_id = await self.db.run_in_transaction(_work)
        logger.info(f"Added emulator {emulator_id} ({name})")
        return emulator_id

    async def update_emulator(
        self,
        emulator_id: int,
        name: str,
        executable: str,
        extract_files: bool
    ) -> int:
        async def _work(session: AsyncSession) -> int:
            emulator = await session.get(Emulator, emulator_id)
            if emulator is None:
                raise NotFoundError("Emulator", emulator_id)
            emulator.name = name
            emulator.executable = executable
            emulator.extract_files = extract_files
            return emulator.id

        return await self.db.run_in_transaction(_work)

    async def get_emulator(self, emulator_id: int) -> Emulator:
        async def _work(session: AsyncSession) -> Emulator:
            emulator = await session.get(Emulator, emulator_id)
            if emulator is None:
                raise NotFoundError("Emulator", emulator_id)
            return emulator

        return await self.db.run(_work)

    async def get_emulators(self) -> List[Emulator]:
        async def _work(session: AsyncSession) -> List[Emulator]:
            result = await session.execute(select(Emulator).order_by(Emulator.name, Emulator.id))
            return list(result.scalars().all())

        return await self.db.run(_work)

    async def add_emulator_system(self, emulator_id: int, system_id: int, arguments: str) -> None:
        """Link an emulator to a system with the arguments used to launch it."""
        async def _work(session: AsyncSession) -> None:
            session.add(EmulatorSystem(
                emulator_id=emulator_id,
                system_id=system_id,
                arguments=arguments
            ))
            await session.flush()

        await self.db.run_in_transaction(_work)
        logger.debug(f"Linked emulator {emulator_id} to system {system_id}")

    async def get_emulator_with_systems(
        self,
        emulator_id: int
    ) -> Tuple[Emulator, List[EmulatorSystemAssociation]]:
        async def _work(session: AsyncSession) -> Tuple[Emulator, List[EmulatorSystemAssociation]]:
            emulator = await session.get(Emulator, emulator_id)
            if emulator is None:
                raise NotFoundError("Emulator", emulator_id)

            result = await session.execute(
                select(EmulatorSystem.system_id, System.name, EmulatorSystem.arguments)
                .join(System, System.id == EmulatorSystem.system_id)
                .where(EmulatorSystem.emulator_id == emulator_id)
                .order_by(System.name)
            )
            associations = [
                EmulatorSystemAssociation(
                    system_id=system_id,
                    system_name=system_name,
                    arguments=arguments
                )
                for system_id, system_name, arguments in result.all()
            ]
            return emulator, associations

        return await self.db.run(_work)

    async def delete_emulator(self, emulator_id: int) -> None:
        """Delete an emulator together with its system associations."""
        async def _work(session: AsyncSession) -> None:
            await session.execute(
                delete(EmulatorSystem)
                .where(EmulatorSystem.emulator_id == emulator_id)
                .execution_options(synchronize_session=False)
            )
            result = await session.execute(
                delete(Emulator)
                .where(Emulator.id == emulator_id)
                .execution_options(synchronize_session=False)
            )
            if not result.rowcount:
                raise NotFoundError("Emulator", emulator_id)

        await self.db.run_in_transaction(_work)
        logger.info(f"Deleted emulator {emulator_id}")
