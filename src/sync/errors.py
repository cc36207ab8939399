"""Typed exception hierarchy for backup sync errors."""

from src.models.errors import NotebookError


class SyncError(NotebookError):
    """Base exception for all backup sync errors."""
    pass


class SyncNotConfiguredError(SyncError):
    """Raised when push or pull is attempted without the required configuration.

    The caller is expected to redirect the user to the sync setup.
    """

    def __init__(self, operation: str, missing: str):
        super().__init__(
            f"Cannot {operation}: {missing} not configured. Run 'notion-lite sync-setup' first."
        )
        self.operation = operation
        self.missing = missing
