"""Typed exception hierarchy for page store errors.

All exceptions inherit from PageStoreError so callers can catch every
store failure at once.
"""

from src.models.errors import NotebookError


class PageStoreError(NotebookError):
    """Base exception for all page store errors."""
    pass


class PageNotFoundError(PageStoreError):
    """Raised when a page id does not exist in the store."""

    def __init__(self, page_id: str):
        super().__init__(f"Page {page_id} not found")
        self.page_id = page_id


class EmptyCollectionError(PageStoreError):
    """Raised when an operation would leave the notebook without pages."""

    def __init__(self, operation: str):
        super().__init__(
            f"Operation '{operation}' would leave the notebook without pages"
        )
        self.operation = operation
