from .file_export import ExportType, FileSetExportModel, OutputFile
from .view_models import (
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

__all__ = [
    "ExportType", "FileSetExportModel", "OutputFile", "EmulatorListModel",
    "EmulatorSystemViewModel", "EmulatorViewModel", "FileInfoViewModel",
    "FileSetListModel", "FileSetViewModel", "ReleaseListModel",
    "ReleaseViewModel", "Settings", "SoftwareTitleListModel",
    "SystemListModel", "SystemViewModel"
]
