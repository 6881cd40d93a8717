from .file_export_service import (
    FileExporter,
    export_file_set,
    prepare_fileset_for_export,
    resolve_file_type_path,
)
from .view_model_service import ViewModelService

__all__ = [
    "FileExporter", "export_file_set", "prepare_fileset_for_export",
    "resolve_file_type_path", "ViewModelService"
]
