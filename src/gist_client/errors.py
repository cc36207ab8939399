"""Typed exception hierarchy for gist backup transport errors.

This module defines all custom exceptions raised while talking to the
gist API. All exceptions inherit from TransportError so callers can treat
every remote failure the same way, and include descriptive messages.
"""

from src.models.errors import NotebookError


class TransportError(NotebookError):
    """Base exception for all remote backup failures."""
    pass


class InvalidCredentialsError(TransportError):
    """Raised when the bearer token is rejected."""

    def __init__(self, endpoint: str):
        super().__init__(f"Access token is invalid or lacks gist scope (endpoint: {endpoint})")
        self.endpoint = endpoint


class GistNotFoundError(TransportError):
    """Raised when the backup gist does not exist."""

    def __init__(self, gist_id: str):
        super().__init__(f"Gist {gist_id} not found")
        self.gist_id = gist_id


class APIUnreachableError(TransportError):
    """Raised when the gist API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class APIAccessError(TransportError):
    """Raised when a gist request does not report success."""

    def __init__(self, message: str = "Gist API failure (after 3 retries)"):
        super().__init__(message)


class BackupFileNotFoundError(TransportError):
    """Raised when the gist has no backup file with the expected name."""

    def __init__(self, gist_id: str, file_name: str):
        super().__init__(f"Backup file '{file_name}' not found in gist {gist_id}")
        self.gist_id = gist_id
        self.file_name = file_name


class EmptyBackupError(TransportError):
    """Raised when the backup file has no content or contains no pages."""

    def __init__(self, message: str):
        super().__init__(message)
