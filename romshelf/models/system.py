"""System (platform) model."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


class System(Base):
    """
    A platform releases run on and emulators emulate.
    Referenced by release_system and emulator_system.
    """

    __tablename__ = "system"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255))

    def __repr__(self):
        return f"<System {self.id} {self.name}>"
