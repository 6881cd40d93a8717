"""
Centralized logging configuration.

Logs are written to:
- the console (human-readable)
- <log_dir>/romshelf.log (JSON lines, rotating)
"""
import json
import logging
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

# Module mapping for categorization
LOG_MODULES = {
    "database": ["romshelf.models", "sqlalchemy", "aiosqlite"],
    "repositories": ["romshelf.repositories"],
    "services": ["romshelf.services"],
}

LOG_FILE_NAME = "romshelf.log"


def get_module_category(logger_name: str) -> str:
    """Map logger name to module category."""
    for module, prefixes in LOG_MODULES.items():
        for prefix in prefixes:
            if logger_name.startswith(prefix):
                return module
    return "other"


class JsonFormatter(logging.Formatter):
    """Format log records as JSON for easy parsing."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": get_module_category(record.name),
            "message": record.getMessage(),
            "filename": record.filename,
            "lineno": record.lineno
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False)


def setup_logging(log_level: str = "INFO", log_dir: Optional[Union[str, Path]] = None):
    """
    Configure logging with:
    - Console output
    - File output (JSON format, rotating) when log_dir is given
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))
    root_logger.addHandler(console_handler)

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path / LOG_FILE_NAME,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=7,
            encoding="utf-8"
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(JsonFormatter())
        root_logger.addHandler(file_handler)

    # Reduce noise from external libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    logging.info("Logging system initialized")
