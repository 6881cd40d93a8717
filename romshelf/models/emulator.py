"""
Emulator model and its per-system launch configuration.
"""
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .database import Base

if TYPE_CHECKING:
    from .system import System


class Emulator(Base):
    """An emulator executable that can launch releases of its systems."""

    __tablename__ = "emulator"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255))
    executable: Mapped[str] = mapped_column(Text)
    # Whether file sets are extracted before launching instead of handed over zipped
    extract_files: Mapped[bool] = mapped_column(Boolean, default=False)

    def __repr__(self):
        return f"<Emulator {self.id} {self.name}>"


class EmulatorSystem(Base):
    """
    Association between an emulator and a system.
    Carries the command line arguments used for that system.
    """

    __tablename__ = "emulator_system"

    emulator_id: Mapped[int] = mapped_column(ForeignKey("emulator.id"), primary_key=True)
    system_id: Mapped[int] = mapped_column(ForeignKey("system.id"), primary_key=True)
    arguments: Mapped[str] = mapped_column(Text, default="", server_default="")

    system: Mapped["System"] = relationship("System")
