"""
File set models.

A file set groups the stored files that make up one importable unit
(e.g. the disks of a multi-disk game). Files are stored once per checksum
in the collection and may belong to several file sets.
"""
from enum import Enum
from typing import List

from sqlalchemy import BigInteger, Enum as SQLEnum, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .database import Base


class FileType(str, Enum):
    """Categories of stored files. Each one lives in its own collection subdirectory."""
    ROM = "rom"
    DISK_IMAGE = "disk_image"
    TAPE_IMAGE = "tape_image"
    MEMORY_SNAPSHOT = "memory_snapshot"
    SCREENSHOT = "screenshot"
    MANUAL_SCAN = "manual_scan"
    COVER_SCAN = "cover_scan"
    DOCUMENT = "document"

    @property
    def dir_name(self) -> str:
        return f"{self.value}s"


def _file_type_column() -> SQLEnum:
    return SQLEnum(
        FileType,
        native_enum=False,
        length=32,
        values_callable=lambda enum: [member.value for member in enum]
    )


class FileInfo(Base):
    """
    A stored file, identified by the SHA-1 of its uncompressed content.

    The archive lives in the collection directory of its file type, so the
    same content imported under two types is stored twice.
    """

    __tablename__ = "file_info"
    __table_args__ = (UniqueConstraint("sha1_checksum", "file_type"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    sha1_checksum: Mapped[str] = mapped_column(String(40))
    file_size: Mapped[int] = mapped_column(BigInteger)
    archive_file_name: Mapped[str] = mapped_column(String(255))
    file_type: Mapped[FileType] = mapped_column(_file_type_column())


class FileSet(Base):
    __tablename__ = "file_set"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    file_set_name: Mapped[str] = mapped_column(String(255))
    file_type: Mapped[FileType] = mapped_column(_file_type_column())

    files: Mapped[List["FileSetFileInfo"]] = relationship(
        "FileSetFileInfo",
        order_by="FileSetFileInfo.file_name",
        viewonly=True
    )

    def __repr__(self):
        return f"<FileSet {self.id} {self.file_set_name}>"


class FileSetFileInfo(Base):
    """
    Membership of a stored file in a file set, under its original file name.

    The same stored file may appear in one set under several names.
    """

    __tablename__ = "file_set_file_info"

    file_set_id: Mapped[int] = mapped_column(ForeignKey("file_set.id"), primary_key=True)
    file_info_id: Mapped[int] = mapped_column(ForeignKey("file_info.id"), primary_key=True)
    file_name: Mapped[str] = mapped_column(String(255), primary_key=True)

    file_info: Mapped["FileInfo"] = relationship("FileInfo", lazy="joined")
