"""
Tests for configuration loading and logging setup.
"""
import json
import logging

import pytest

from romshelf.config import AppConfig, get_app_config
from romshelf.logging_config import LOG_FILE_NAME, get_module_category, setup_logging
from romshelf.models.file_set import FileType


@pytest.fixture
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


class TestAppConfig:
    """Test environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ROMSHELF_DATABASE_URL", raising=False)
        config = AppConfig(_env_file=None)

        assert config.database_url == "sqlite+aiosqlite:///./data/romshelf.db"
        assert config.lock_retry_attempts == 5
        assert config.log_level == "INFO"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("ROMSHELF_DATABASE_URL", "sqlite:////var/lib/romshelf/shelf.db")
        monkeypatch.setenv("ROMSHELF_LOCK_RETRY_ATTEMPTS", "9")
        monkeypatch.setenv("ROMSHELF_LOG_LEVEL", "debug")

        config = AppConfig(_env_file=None)

        assert config.database_url == "sqlite+aiosqlite:////var/lib/romshelf/shelf.db"
        assert config.lock_retry_attempts == 9
        assert config.log_level == "DEBUG"

    def test_get_app_config_is_cached(self):
        get_app_config.cache_clear()
        try:
            assert get_app_config() is get_app_config()
        finally:
            get_app_config.cache_clear()


class TestLogging:
    """Test logging setup."""

    def test_get_module_category(self):
        assert get_module_category("romshelf.repositories.system_repository") == "repositories"
        assert get_module_category("romshelf.models.database") == "database"
        assert get_module_category("sqlalchemy.engine") == "database"
        assert get_module_category("romshelf.services.view_model_service") == "services"
        assert get_module_category("asyncio") == "other"

    def test_setup_logging_writes_json_lines(self, tmp_path, restore_root_logger):
        setup_logging("info", tmp_path / "logs")
        logging.getLogger("romshelf.repositories.system_repository").warning("System 3 in use")
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = (tmp_path / "logs" / LOG_FILE_NAME).read_text(encoding="utf-8").splitlines()
        entries = [json.loads(line) for line in lines]

        assert entries[0]["message"] == "Logging system initialized"
        assert entries[-1]["message"] == "System 3 in use"
        assert entries[-1]["level"] == "WARNING"
        assert entries[-1]["module"] == "repositories"


class TestFileType:

    def test_dir_name(self):
        assert FileType.ROM.dir_name == "roms"
        assert FileType.MANUAL_SCAN.dir_name == "manual_scans"
        assert FileType("disk_image") is FileType.DISK_IMAGE
