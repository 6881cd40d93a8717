"""
Release repository.

A release is only ever written together with its full association set
(software titles, file sets, systems). add_release_full and
update_release_full each run as one transaction: either the release ends
up with exactly the given associations, or nothing is committed.
"""
import logging
from typing import Iterable, List

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..exceptions import NotFoundError
from ..models.database import Database
from ..models.file_set import FileSet
from ..models.release import (
    Release,
    release_file_set,
    release_software_title,
    release_system,
)

logger = logging.getLogger(__name__)

# (table, column holding the associated id)
ASSOCIATION_TABLES = (
    (release_software_title, "software_title_id"),
    (release_file_set, "file_set_id"),
    (release_system, "system_id"),
)


def _unique_ids(ids: Iterable[int]) -> List[int]:
    """Drop repeated ids, keeping first-seen order."""
    return list(dict.fromkeys(ids))


class ReleaseRepository:

    def __init__(self, db: Database):
        self.db = db

    async def _insert_associations(
        self,
        session: AsyncSession,
        release_id: int,
        software_title_ids: List[int],
        file_set_ids: List[int],
        system_ids: List[int]
    ) -> None:
        for (table, column), ids in zip(
            ASSOCIATION_TABLES,
            (software_title_ids, file_set_ids, system_ids)
        ):
            if not ids:
                continue
            await session.execute(
                insert(table),
                [{"release_id": release_id, column: associated_id} for associated_id in ids]
            )

    @staticmethod
    async def _clear_associations(session: AsyncSession, release_id: int) -> None:
        for table, _column in ASSOCIATION_TABLES:
            await session.execute(delete(table).where(table.c.release_id == release_id))

    async def add_release_full(
        self,
        name: str,
        software_title_ids: Iterable[int],
        file_set_ids: Iterable[int],
        system_ids: Iterable[int]
    ) -> int:
        """Create a release with all of its associations. Returns the new release id."""
        software_title_ids = _unique_ids(software_title_ids)
        file_set_ids = _unique_ids(file_set_ids)
        system_ids = _unique_ids(system_ids)

        async def _work(session: AsyncSession) -> int:
            release = Release(name=name)
            session.add(release)
            await session.flush()
            await self._insert_associations(
                session, release.id, software_title_ids, file_set_ids, system_ids
            )
            return release.id

        release_id = await self.db.run_in_transaction(_work)
        logger.info(
            f"Added release {release_id} (titles={software_title_ids}, "
            f"file_sets={file_set_ids}, systems={system_ids})"
        )
        return release_id

    async def update_release_full(
        self,
        release_id: int,
        name: str,
        software_title_ids: Iterable[int],
        file_set_ids: Iterable[int],
        system_ids: Iterable[int]
    ) -> int:
        """
        Replace a release's name and all of its associations.

        Existing association rows are cleared and the new sets inserted,
        rather than diffed against the stored ones.
        """
        software_title_ids = _unique_ids(software_title_ids)
        file_set_ids = _unique_ids(file_set_ids)
        system_ids = _unique_ids(system_ids)

        async def _work(session: AsyncSession) -> int:
            release = await session.get(Release, release_id)
            if release is None:
                raise NotFoundError("Release", release_id)
            release.name = name
            await session.flush()
            await self._clear_associations(session, release_id)
            await self._insert_associations(
                session, release_id, software_title_ids, file_set_ids, system_ids
            )
            return release_id

        await self.db.run_in_transaction(_work)
        logger.info(
            f"Updated release {release_id} (titles={software_title_ids}, "
            f"file_sets={file_set_ids}, systems={system_ids})"
        )
        return release_id

    async def get_release(self, release_id: int) -> Release:
        """Release with software titles, file sets (and their files) and systems loaded."""
        async def _work(session: AsyncSession) -> Release:
            result = await session.execute(
                select(Release)
                .options(
                    selectinload(Release.software_titles),
                    selectinload(Release.file_sets).selectinload(FileSet.files),
                    selectinload(Release.systems)
                )
                .where(Release.id == release_id)
            )
            release = result.scalar_one_or_none()
            if release is None:
                raise NotFoundError("Release", release_id)
            return release

        return await self.db.run(_work)

    async def get_releases(self) -> List[Release]:
        """All releases with systems and file sets loaded (for list views)."""
        async def _work(session: AsyncSession) -> List[Release]:
            result = await session.execute(
                select(Release)
                .options(
                    selectinload(Release.file_sets),
                    selectinload(Release.systems)
                )
                .order_by(Release.name, Release.id)
            )
            return list(result.scalars().all())

        return await self.db.run(_work)

    async def get_releases_for_software_title(self, software_title_id: int) -> List[Release]:
        async def _work(session: AsyncSession) -> List[Release]:
            result = await session.execute(
                select(Release)
                .join(
                    release_software_title,
                    release_software_title.c.release_id == Release.id
                )
                .where(release_software_title.c.software_title_id == software_title_id)
                .options(
                    selectinload(Release.file_sets),
                    selectinload(Release.systems)
                )
                .order_by(Release.name, Release.id)
            )
            return list(result.scalars().all())

        return await self.db.run(_work)

    async def delete_release(self, release_id: int) -> None:
        """Delete a release and every association row pointing at it."""
        async def _work(session: AsyncSession) -> None:
            await self._clear_associations(session, release_id)
            result = await session.execute(
                delete(Release)
                .where(Release.id == release_id)
                .execution_options(synchronize_session=False)
            )
            if not result.rowcount:
                raise NotFoundError("Release", release_id)

        await self.db.run_in_transaction(_work)
        logger.info(f"Deleted release {release_id}")
