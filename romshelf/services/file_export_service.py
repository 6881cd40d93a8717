"""
Preparation of file sets for the file export utility.

The exporter itself (decompression, checksum verification, writing) lives
outside this package; it is reached through the FileExporter protocol.
"""
import logging
from pathlib import Path
from typing import Protocol

from ..models.file_set import FileType
from ..schemas.file_export import ExportType, FileSetExportModel, OutputFile
from ..schemas.view_models import FileSetViewModel, Settings

logger = logging.getLogger(__name__)


class FileExporter(Protocol):
    """Writes a prepared file set to disk. Raises on any failure."""

    def export(self, model: FileSetExportModel, export_type: ExportType) -> None:
        ...


def resolve_file_type_path(root_path: Path, file_type: FileType) -> Path:
    """Directory of the collection holding files of the given type."""
    return Path(root_path) / file_type.dir_name


def prepare_fileset_for_export(
    file_set: FileSetViewModel,
    collection_root_dir: Path,
    temp_dir: Path,
    extract_files: bool
) -> FileSetExportModel:
    output_mapping = {
        file.archive_file_name: OutputFile(
            output_file_name=file.file_name,
            checksum=file.sha1_checksum
        )
        for file in file_set.files
    }
    logger.debug(f"Prepared file set {file_set.id} for export ({len(output_mapping)} files)")

    return FileSetExportModel(
        source_file_path=resolve_file_type_path(collection_root_dir, file_set.file_type),
        output_dir=Path(temp_dir),
        output_mapping=output_mapping,
        extract_files=extract_files,
        exported_zip_file_name=file_set.file_set_name
    )


def export_file_set(
    exporter: FileExporter,
    file_set: FileSetViewModel,
    settings: Settings,
    export_type: ExportType,
    extract_files: bool = False
) -> FileSetExportModel:
    """Prepare a file set from the collection settings and hand it to the exporter."""
    model = prepare_fileset_for_export(
        file_set,
        settings.collection_root_dir,
        settings.temp_output_dir,
        extract_files
    )
    logger.info(f"Exporting file set {file_set.file_set_name} as {export_type.value}")
    exporter.export(model, export_type)
    return model
