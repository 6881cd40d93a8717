"""Software title model."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


class SoftwareTitle(Base):
    __tablename__ = "software_title"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255))

    def __repr__(self):
        return f"<SoftwareTitle {self.id} {self.name}>"
