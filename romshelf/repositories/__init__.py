from .emulator_repository import EmulatorRepository, EmulatorSystemAssociation
from .file_set_repository import FileSetRepository, ImportedFile
from .release_repository import ReleaseRepository
from .repository_manager import RepositoryManager
from .setting_repository import SettingRepository
from .software_title_repository import SoftwareTitleRepository
from .system_repository import SystemRepository

__all__ = [
    "EmulatorRepository", "EmulatorSystemAssociation", "FileSetRepository",
    "ImportedFile", "ReleaseRepository", "RepositoryManager",
    "SettingRepository", "SoftwareTitleRepository", "SystemRepository"
]
