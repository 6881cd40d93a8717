"""
Repository manager: the single entry point to all repositories.
"""
from ..models.database import Database
from .emulator_repository import EmulatorRepository
from .file_set_repository import FileSetRepository
from .release_repository import ReleaseRepository
from .setting_repository import SettingRepository
from .software_title_repository import SoftwareTitleRepository
from .system_repository import SystemRepository


class RepositoryManager:
    """Builds every repository over one shared Database handle."""

    def __init__(self, db: Database):
        self.db = db
        self._setting_repository = SettingRepository(db)
        self._system_repository = SystemRepository(db)
        self._emulator_repository = EmulatorRepository(db)
        self._release_repository = ReleaseRepository(db)
        self._software_title_repository = SoftwareTitleRepository(db)
        self._file_set_repository = FileSetRepository(db)

    def settings(self) -> SettingRepository:
        return self._setting_repository

    def get_system_repository(self) -> SystemRepository:
        return self._system_repository

    def get_emulator_repository(self) -> EmulatorRepository:
        return self._emulator_repository

    def get_release_repository(self) -> ReleaseRepository:
        return self._release_repository

    def get_software_title_repository(self) -> SoftwareTitleRepository:
        return self._software_title_repository

    def get_file_set_repository(self) -> FileSetRepository:
        return self._file_set_repository
