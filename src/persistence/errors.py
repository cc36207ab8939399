"""Typed exception hierarchy for persistence errors."""

from typing import Optional

from src.models.errors import NotebookError


class PersistenceError(NotebookError):
    """Base exception for all persistence errors."""
    pass


class StorageError(PersistenceError):
    """Raised when the key-value store file cannot be read or written."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Storage operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason
