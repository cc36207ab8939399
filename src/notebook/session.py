"""Notebook session: the single entry point for committed page changes.

A front end owns its transient input buffers and calls into the session
whenever a change is committed. Every successful mutation is followed by a
full save of the collection; failed operations leave both memory and
storage untouched.
"""

import copy
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set

from src.models.page import Block, Page
from src.page_store.errors import EmptyCollectionError
from src.page_store.hierarchy import VisiblePage
from src.page_store.page_store import PageStore
from src.persistence.codec import decode_pages, encode_pages
from src.persistence.errors import StorageError
from src.persistence.repository import PageRepository
from src.sync.backup_sync import BackupSync

logger = logging.getLogger(__name__)


@dataclass
class PagePatch:
    """A committed edit to a page. Fields left as None are not changed.

    Attributes:
        title: New title (trimmed, "Untitled" when blank)
        content: New markdown content
        blocks: New block list (ignored when content is also given)
    """
    title: Optional[str] = None
    content: Optional[str] = None
    blocks: Optional[List[Block]] = None

    def is_empty(self) -> bool:
        return self.title is None and self.content is None and self.blocks is None


class NotebookSession:
    """Page store bound to a repository.

    Example:
        >>> session = NotebookSession(PageRepository(KeyValueStore("store.yaml")))
        >>> session.open()
        >>> page = session.create_page()
        >>> session.edit_page(page.page_id, PagePatch(content="hello"))
    """

    def __init__(self, repository: PageRepository):
        self._repository = repository
        self._store: Optional[PageStore] = None

    @property
    def store(self) -> PageStore:
        if self._store is None:
            raise RuntimeError("Notebook session is not open; call open() first")
        return self._store

    def open(self) -> PageStore:
        """Load pages from the repository.

        Raises:
            DecodeError: If the stored blob is malformed
            StorageError: If the store cannot be read
        """
        self._store = PageStore(self._repository.load())
        logger.debug(f"Opened notebook with {len(self._store)} page(s)")
        return self._store

    def _persist(self) -> None:
        self._repository.save(self.store.pages)

    @contextmanager
    def _rollback_on_storage_error(self):
        """Restore the in-memory pages if saving the change fails."""
        snapshot = copy.deepcopy(self.store.pages)
        try:
            yield
        except StorageError:
            logger.warning("Save failed, discarding the unsaved change")
            self.store.replace_all(snapshot)
            raise

    def create_page(self, parent_id: Optional[str] = None) -> Page:
        with self._rollback_on_storage_error():
            page = self.store.create(parent_id)
            self._persist()
        return page

    def edit_page(self, page_id: str, patch: PagePatch) -> Page:
        """Apply a committed patch and persist.

        Raises:
            PageNotFoundError: If page_id is unknown
        """
        if patch.is_empty():
            return self.store.require(page_id)
        with self._rollback_on_storage_error():
            page = self.store.edit(
                page_id,
                title=patch.title,
                content=patch.content,
                blocks=patch.blocks,
            )
            self._persist()
        return page

    def append_block(self, page_id: str, block: Block) -> Page:
        """Append one block to a page, keeping its existing content text.

        Raises:
            PageNotFoundError: If page_id is unknown
        """
        with self._rollback_on_storage_error():
            page = self.store.append_block(page_id, block)
            self._persist()
        return page

    def delete_page(self, page_id: str) -> Set[str]:
        with self._rollback_on_storage_error():
            removed = self.store.delete(page_id)
            if removed:
                self._persist()
        return removed

    def toggle_favorite(self, page_id: str) -> Page:
        with self._rollback_on_storage_error():
            page = self.store.toggle_favorite(page_id)
            self._persist()
        return page

    def visible(self, query: str = "") -> List[VisiblePage]:
        return self.store.visible(query)

    def selected(self, page_id: Optional[str], query: str = "") -> Optional[Page]:
        return self.store.selected(page_id, query)

    def export_json(self) -> str:
        """Return the whole collection as a JSON array string."""
        return encode_pages(self.store.pages)

    def import_json(self, text: str) -> int:
        """Replace the collection with pages parsed from JSON text.

        An empty array is ignored.

        Returns:
            Number of imported pages (0 when nothing changed)

        Raises:
            DecodeError: If text is not a valid page array; state is unchanged
        """
        pages = decode_pages(text)
        if not pages:
            logger.info("Import contained no pages, nothing changed")
            return 0
        self._replace(pages)
        return len(pages)

    def push_backup(self, sync: BackupSync) -> str:
        """Back up the current collection; returns the backup store id."""
        return sync.push(self.store.pages)

    def pull_backup(self, sync: BackupSync) -> int:
        """Replace the collection with the remote backup.

        Local pages are replaced only after the pull fully succeeded.

        Returns:
            Number of pulled pages
        """
        pages = sync.pull()
        self._replace(pages)
        return len(pages)

    def _replace(self, pages: Sequence[Page]) -> None:
        # Memory changes only after storage has been written
        if not pages:
            raise EmptyCollectionError("replace_all")
        self._repository.save(pages)
        self.store.replace_all(pages)
