"""Base exception types shared by every notebook package.

All application errors inherit from NotebookError so the CLI can catch
anything raised by the library with a single except clause.
"""

from typing import Optional


class NotebookError(Exception):
    """Base exception for all notion-lite errors.

    Use this to catch any application-level error from the notebook.
    """
    pass


class DecodeError(NotebookError):
    """Raised when a stored blob or pasted JSON cannot be decoded into pages."""

    def __init__(
        self,
        message: str,
        record_index: Optional[int] = None,
        field: Optional[str] = None
    ):
        if record_index is not None and field:
            full_message = f"Invalid page record {record_index} (field '{field}'): {message}"
        elif record_index is not None:
            full_message = f"Invalid page record {record_index}: {message}"
        else:
            full_message = f"Invalid page data: {message}"
        super().__init__(full_message)
        self.record_index = record_index
        self.field = field
        self.original_message = message
