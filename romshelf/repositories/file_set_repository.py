"""
File set repository.

File sets are produced by the import pipeline: once the files are written
into the collection, add_file_set records them and their checksums.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..exceptions import NotFoundError
from ..models.database import Database
from ..models.file_set import FileInfo, FileSet, FileSetFileInfo, FileType
from ..models.release import release_file_set, release_system

logger = logging.getLogger(__name__)


@dataclass
class ImportedFile:
    """A file written into the collection by the import pipeline."""
    file_name: str
    archive_file_name: str
    sha1_checksum: str
    file_size: int


class FileSetRepository:

    def __init__(self, db: Database):
        self.db = db

    async def add_file_set(
        self,
        file_set_name: str,
        file_type: FileType,
        files: Iterable[ImportedFile]
    ) -> int:
        """
        Record a file set and its files in one transaction.

        Files already stored under the same checksum and file type are
        reused rather than stored twice. A file listed twice under the same
        name is linked once; under different names it is linked under each.
        """
        files = list(files)

        async def _work(session: AsyncSession) -> int:
            file_set = FileSet(file_set_name=file_set_name, file_type=file_type)
            session.add(file_set)
            await session.flush()

            file_infos = {}
            linked = set()
            for imported in files:
                checksum = imported.sha1_checksum.lower()
                if (checksum, imported.file_name) in linked:
                    continue
                file_info = file_infos.get(checksum)
                if file_info is None:
                    file_info = await session.scalar(
                        select(FileInfo).where(
                            FileInfo.sha1_checksum == checksum,
                            FileInfo.file_type == file_type
                        )
                    )
                if file_info is None:
                    file_info = FileInfo(
                        sha1_checksum=checksum,
                        file_size=imported.file_size,
                        archive_file_name=imported.archive_file_name,
                        file_type=file_type
                    )
                    session.add(file_info)
                    await session.flush()
                file_infos[checksum] = file_info
                session.add(FileSetFileInfo(
                    file_set_id=file_set.id,
                    file_info_id=file_info.id,
                    file_name=imported.file_name
                ))
                linked.add((checksum, imported.file_name))
            await session.flush()
            return file_set.id

        file_set_id = await self.db.run_in_transaction(_work)
        logger.info(f"Added file set {file_set_id} ({file_set_name}, {len(files)} files)")
        return file_set_id

    async def get_file_set(self, file_set_id: int) -> FileSet:
        async def _work(session: AsyncSession) -> FileSet:
            result = await session.execute(
                select(FileSet)
                .options(selectinload(FileSet.files))
                .where(FileSet.id == file_set_id)
            )
            file_set = result.scalar_one_or_none()
            if file_set is None:
                raise NotFoundError("FileSet", file_set_id)
            return file_set

        return await self.db.run(_work)

    async def get_file_sets(self) -> List[FileSet]:
        async def _work(session: AsyncSession) -> List[FileSet]:
            result = await session.execute(
                select(FileSet).order_by(FileSet.file_set_name, FileSet.id)
            )
            return list(result.scalars().all())

        return await self.db.run(_work)

    async def get_file_sets_by_system_ids(self, system_ids: Iterable[int]) -> List[FileSet]:
        """File sets attached to any release of the given systems."""
        system_ids = list(system_ids)

        async def _work(session: AsyncSession) -> List[FileSet]:
            if not system_ids:
                return []
            result = await session.execute(
                select(FileSet)
                .join(release_file_set, release_file_set.c.file_set_id == FileSet.id)
                .join(
                    release_system,
                    release_system.c.release_id == release_file_set.c.release_id
                )
                .where(release_system.c.system_id.in_(system_ids))
                .distinct()
                .order_by(FileSet.file_set_name, FileSet.id)
            )
            return list(result.scalars().all())

        return await self.db.run(_work)
