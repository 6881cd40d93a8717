from .database import Base, Database
from .setting import Setting, SettingName
from .system import System
from .software_title import SoftwareTitle
from .emulator import Emulator, EmulatorSystem
from .file_set import FileInfo, FileSet, FileSetFileInfo, FileType
from .release import Release, release_file_set, release_software_title, release_system

__all__ = [
    "Base", "Database", "Setting", "SettingName", "System", "SoftwareTitle",
    "Emulator", "EmulatorSystem", "FileInfo", "FileSet", "FileSetFileInfo",
    "FileType", "Release", "release_file_set", "release_software_title",
    "release_system"
]
