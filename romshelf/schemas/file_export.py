"""
Schemas handed to the file export utility.
"""
import re
from enum import Enum
from pathlib import Path
from typing import Dict

from pydantic import BaseModel, Field, field_validator

SHA1_RE = re.compile(r"^[0-9a-f]{40}$")


class ExportType(str, Enum):
    ZIPPED = "zipped"
    INDIVIDUAL_FILES_WITH_COMPRESSION = "individual_files_with_compression"
    INDIVIDUAL_FILES_WITHOUT_COMPRESSION = "individual_files_without_compression"


class OutputFile(BaseModel):
    """Target name of one exported file and the SHA-1 it must match."""
    output_file_name: str
    checksum: str

    @field_validator("checksum")
    @classmethod
    def validate_checksum(cls, v: str) -> str:
        v = v.lower()
        if not SHA1_RE.match(v):
            raise ValueError(f"Invalid SHA-1 checksum: {v!r}")
        return v


class FileSetExportModel(BaseModel):
    """Everything the exporter needs to write one file set out of the collection."""
    source_file_path: Path
    output_dir: Path
    # archive file name in the collection -> exported file
    output_mapping: Dict[str, OutputFile] = Field(default_factory=dict)
    extract_files: bool = False
    exported_zip_file_name: str
