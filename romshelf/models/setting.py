"""
Key-value store for collection settings.
"""
from enum import Enum

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


class SettingName(str, Enum):
    """Known setting keys. The store itself accepts any string key."""
    COLLECTION_ROOT_DIR = "collection_root_dir"
    TEMP_OUTPUT_DIR = "temp_output_dir"


class Setting(Base):
    """A single setting row, keyed by name."""

    __tablename__ = "setting"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text)

    def __repr__(self):
        return f"<Setting {self.key}={self.value[:50]}>"
