"""
Release model and its association tables.

A release links software titles, file sets and systems. The association
rows are written only through ReleaseRepository, which replaces the whole
set in one transaction; the relationships below are read-only views.
"""
from typing import List

from sqlalchemy import Column, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .database import Base
from .file_set import FileSet
from .software_title import SoftwareTitle
from .system import System


release_software_title = Table(
    "release_software_title",
    Base.metadata,
    Column("release_id", ForeignKey("release.id"), primary_key=True),
    Column("software_title_id", ForeignKey("software_title.id"), primary_key=True),
)

release_file_set = Table(
    "release_file_set",
    Base.metadata,
    Column("release_id", ForeignKey("release.id"), primary_key=True),
    Column("file_set_id", ForeignKey("file_set.id"), primary_key=True),
)

release_system = Table(
    "release_system",
    Base.metadata,
    Column("release_id", ForeignKey("release.id"), primary_key=True),
    Column("system_id", ForeignKey("system.id"), primary_key=True),
)


class Release(Base):
    __tablename__ = "release"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), default="", server_default="")

    software_titles: Mapped[List[SoftwareTitle]] = relationship(
        secondary=release_software_title,
        order_by=SoftwareTitle.name,
        viewonly=True
    )
    file_sets: Mapped[List[FileSet]] = relationship(
        secondary=release_file_set,
        order_by=FileSet.file_set_name,
        viewonly=True
    )
    systems: Mapped[List[System]] = relationship(
        secondary=release_system,
        order_by=System.name,
        viewonly=True
    )

    def __repr__(self):
        return f"<Release {self.id} {self.name!r}>"
