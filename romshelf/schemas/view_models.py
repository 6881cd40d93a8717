"""
View models: read-only projections of repository data for display.
They hold plain values only, never sessions or ORM objects.
"""
import tempfile
from pathlib import Path
from typing import List, Mapping

from pydantic import BaseModel, Field

from ..models.file_set import FileType
from ..models.setting import SettingName

DEFAULT_COLLECTION_ROOT_DIR = Path.home() / "romshelf" / "collection"
DEFAULT_TEMP_OUTPUT_DIR = Path(tempfile.gettempdir()) / "romshelf"


class SystemViewModel(BaseModel):
    id: int
    name: str


class SystemListModel(BaseModel):
    """System row for the system list; can_delete is False while anything references it."""
    id: int
    name: str
    can_delete: bool = False


class EmulatorSystemViewModel(BaseModel):
    system_id: int
    system_name: str
    arguments: str


class EmulatorViewModel(BaseModel):
    id: int
    name: str
    executable: str
    extract_files: bool
    systems: List[EmulatorSystemViewModel] = Field(default_factory=list)


class EmulatorListModel(BaseModel):
    id: int
    name: str


class SoftwareTitleListModel(BaseModel):
    id: int
    name: str


class FileInfoViewModel(BaseModel):
    file_info_id: int
    file_name: str
    archive_file_name: str
    sha1_checksum: str
    file_size: int


class FileSetViewModel(BaseModel):
    id: int
    file_set_name: str
    file_type: FileType
    files: List[FileInfoViewModel] = Field(default_factory=list)


class FileSetListModel(BaseModel):
    id: int
    file_set_name: str
    file_type: FileType


class ReleaseViewModel(BaseModel):
    id: int
    name: str
    systems: List[SystemViewModel] = Field(default_factory=list)
    software_titles: List[SoftwareTitleListModel] = Field(default_factory=list)
    file_sets: List[FileSetViewModel] = Field(default_factory=list)


class ReleaseListModel(BaseModel):
    id: int
    name: str
    system_names: List[str] = Field(default_factory=list)
    file_types: List[FileType] = Field(default_factory=list)


class Settings(BaseModel):
    """
    Typed view of the setting table.

    Recognized keys (see SettingName) and their defaults:
    - collection_root_dir: DEFAULT_COLLECTION_ROOT_DIR
    - temp_output_dir: DEFAULT_TEMP_OUTPUT_DIR
    Any other key is ignored.
    """
    collection_root_dir: Path = DEFAULT_COLLECTION_ROOT_DIR
    temp_output_dir: Path = DEFAULT_TEMP_OUTPUT_DIR

    @classmethod
    def from_map(cls, settings_map: Mapping[str, str]) -> "Settings":
        values = {}
        for setting_name in SettingName:
            value = settings_map.get(setting_name.value)
            if value:
                values[setting_name.value] = Path(value)
        return cls(**values)
