"""
Exceptions raised by the data-access layer and the view-model service.
"""
from typing import Any, Optional


class DatabaseError(Exception):
    """Base exception for database errors."""

    def __init__(self, message: str = "Database error"):
        self.message = message
        super().__init__(self.message)


class NotFoundError(DatabaseError):
    """Raised when a requested key or id does not exist."""

    def __init__(self, entity: str, key: Any, message: Optional[str] = None):
        self.entity = entity
        self.key = key
        super().__init__(message or f"{entity} {key!r} not found")


class ConflictError(DatabaseError):
    """Raised on a uniqueness (primary key or unique constraint) violation."""
    pass


class SystemInUseError(ConflictError):
    """Raised when deleting a system that releases or emulators still reference."""

    def __init__(self, system_id: int):
        self.system_id = system_id
        super().__init__(f"System {system_id} is in use and cannot be deleted")


class IntegrityViolationError(DatabaseError):
    """Raised when a write references a row that does not exist."""
    pass


class StorageError(DatabaseError):
    """Raised on connectivity, I/O, lock exhaustion or unclassified engine errors."""
    pass


class ServiceError(Exception):
    """Raised by the view-model service; wraps the underlying database error."""

    def __init__(self, error: DatabaseError, message: Optional[str] = None):
        self.error = error
        self.message = message or error.message
        super().__init__(self.message)

    @property
    def is_not_found(self) -> bool:
        return isinstance(self.error, NotFoundError)
