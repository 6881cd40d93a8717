"""
View-model service.

Composes repository reads into display-ready view models. Repository
errors are re-raised as ServiceError so the caller can show a message
and keep going.
"""
import logging
from contextlib import contextmanager
from typing import List

from ..exceptions import DatabaseError, ServiceError
from ..models.file_set import FileSet
from ..repositories.repository_manager import RepositoryManager
from ..schemas.view_models import (
    EmulatorListModel,
    EmulatorSystemViewModel,
    EmulatorViewModel,
    FileInfoViewModel,
    FileSetListModel,
    FileSetViewModel,
    ReleaseListModel,
    ReleaseViewModel,
    Settings,
    SoftwareTitleListModel,
    SystemListModel,
    SystemViewModel,
)

logger = logging.getLogger(__name__)


@contextmanager
def _service_errors(action: str):
    try:
        yield
    except DatabaseError as e:
        logger.error(f"Failed to {action}: {e.message}")
        raise ServiceError(e, f"Failed to {action}: {e.message}") from e


def _file_set_view_model(file_set: FileSet) -> FileSetViewModel:
    return FileSetViewModel(
        id=file_set.id,
        file_set_name=file_set.file_set_name,
        file_type=file_set.file_type,
        files=[
            FileInfoViewModel(
                file_info_id=member.file_info_id,
                file_name=member.file_name,
                archive_file_name=member.file_info.archive_file_name,
                sha1_checksum=member.file_info.sha1_checksum,
                file_size=member.file_info.file_size
            )
            for member in file_set.files
        ]
    )


class ViewModelService:

    def __init__(self, repository_manager: RepositoryManager):
        self.repository_manager = repository_manager

    async def get_system_list_models(self) -> List[SystemListModel]:
        """All systems; can_delete reflects the release_system and emulator_system rows."""
        system_repository = self.repository_manager.get_system_repository()
        with _service_errors("load systems"):
            systems = await system_repository.get_systems()
            in_use = await system_repository.get_systems_in_use()

        return [
            SystemListModel(id=system.id, name=system.name, can_delete=system.id not in in_use)
            for system in systems
        ]

    async def get_emulator_view_model(self, emulator_id: int) -> EmulatorViewModel:
        with _service_errors(f"load emulator {emulator_id}"):
            emulator, emulator_systems = await (
                self.repository_manager
                .get_emulator_repository()
                .get_emulator_with_systems(emulator_id)
            )

        return EmulatorViewModel(
            id=emulator.id,
            name=emulator.name,
            executable=emulator.executable,
            extract_files=emulator.extract_files,
            systems=[
                EmulatorSystemViewModel(
                    system_id=es.system_id,
                    system_name=es.system_name,
                    arguments=es.arguments
                )
                for es in emulator_systems
            ]
        )

    async def get_emulator_list_models(self) -> List[EmulatorListModel]:
        with _service_errors("load emulators"):
            emulators = await self.repository_manager.get_emulator_repository().get_emulators()
        return [EmulatorListModel(id=emulator.id, name=emulator.name) for emulator in emulators]

    async def get_settings(self) -> Settings:
        with _service_errors("load settings"):
            settings_map = await self.repository_manager.settings().get_settings()
        return Settings.from_map(settings_map)

    async def get_release_view_model(self, release_id: int) -> ReleaseViewModel:
        with _service_errors(f"load release {release_id}"):
            release = await self.repository_manager.get_release_repository().get_release(release_id)

        return ReleaseViewModel(
            id=release.id,
            name=release.name,
            systems=[
                SystemViewModel(id=system.id, name=system.name)
                for system in release.systems
            ],
            software_titles=[
                SoftwareTitleListModel(id=title.id, name=title.name)
                for title in release.software_titles
            ],
            file_sets=[_file_set_view_model(file_set) for file_set in release.file_sets]
        )

    async def get_release_list_models(self) -> List[ReleaseListModel]:
        with _service_errors("load releases"):
            releases = await self.repository_manager.get_release_repository().get_releases()

        return [
            ReleaseListModel(
                id=release.id,
                name=release.name,
                system_names=[system.name for system in release.systems],
                file_types=list(dict.fromkeys(fs.file_type for fs in release.file_sets))
            )
            for release in releases
        ]

    async def get_software_title_list_models(self) -> List[SoftwareTitleListModel]:
        with _service_errors("load software titles"):
            titles = await (
                self.repository_manager
                .get_software_title_repository()
                .get_software_titles()
            )
        return [SoftwareTitleListModel(id=title.id, name=title.name) for title in titles]

    async def get_file_set_list_models(self) -> List[FileSetListModel]:
        with _service_errors("load file sets"):
            file_sets = await self.repository_manager.get_file_set_repository().get_file_sets()
        return [
            FileSetListModel(
                id=file_set.id,
                file_set_name=file_set.file_set_name,
                file_type=file_set.file_type
            )
            for file_set in file_sets
        ]

    async def get_file_set_view_model(self, file_set_id: int) -> FileSetViewModel:
        with _service_errors(f"load file set {file_set_id}"):
            file_set = await self.repository_manager.get_file_set_repository().get_file_set(file_set_id)
        return _file_set_view_model(file_set)
