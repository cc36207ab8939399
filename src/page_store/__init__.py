"""Page store library.

This package provides the in-memory page collection, the parent/child
hierarchy helpers and the favorite/recency ordering used by every view.
"""

from .errors import EmptyCollectionError, PageNotFoundError, PageStoreError
from .hierarchy import HierarchyBuilder, VisiblePage, display_sorted
from .page_store import PageStore

__all__ = [
    'EmptyCollectionError',
    'HierarchyBuilder',
    'PageNotFoundError',
    'PageStore',
    'PageStoreError',
    'VisiblePage',
    'display_sorted',
]
