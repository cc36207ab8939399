"""Page repository: durable round-trip of the full page collection.

The whole collection lives as one JSON blob under one storage key. Every
save is a total overwrite; there are no incremental writes.
"""

import logging
from typing import List, Sequence

from src.content_converter.block_converter import BlockConverter
from src.models.page import Page, new_id, utc_now
from .codec import decode_pages, encode_pages
from .kv_store import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = 'notion_lite_pages_v2'

WELCOME_TITLE = 'Welcome'
WELCOME_CONTENT = (
    '# Notion Lite\n'
    '\n'
    '- Use sidebar search\n'
    '- Pin important pages\n'
    '- Toggle Preview mode\n'
    '- Export and import JSON'
)


class PageRepository:
    """Loads and saves pages through a KeyValueStore.

    Example:
        >>> repo = PageRepository(KeyValueStore("store.yaml"))
        >>> pages = repo.load()   # seeds a welcome page on first run
        >>> repo.save(pages)
    """

    def __init__(self, store: KeyValueStore, storage_key: str = STORAGE_KEY):
        self._store = store
        self._storage_key = storage_key

    def load(self) -> List[Page]:
        """Read the stored collection.

        When nothing (or an empty array) is stored yet, a favorite welcome
        page is created and persisted immediately.

        Returns:
            Stored pages in order

        Raises:
            DecodeError: If the stored blob is malformed
            StorageError: If the underlying store cannot be read
        """
        raw = self._store.get(self._storage_key)
        pages = decode_pages(raw) if raw else []
        if not pages:
            logger.info("No stored pages found, seeding welcome page")
            pages = [self._welcome_page()]
            self.save(pages)
            return pages

        logger.debug(f"Loaded {len(pages)} page(s) from '{self._storage_key}'")
        return pages

    def save(self, pages: Sequence[Page]) -> None:
        """Overwrite the stored collection with pages.

        Raises:
            StorageError: If the underlying store cannot be written
        """
        self._store.set(self._storage_key, encode_pages(pages))
        logger.debug(f"Saved {len(pages)} page(s) to '{self._storage_key}'")

    @staticmethod
    def _welcome_page() -> Page:
        return Page(
            page_id=new_id(),
            title=WELCOME_TITLE,
            content=WELCOME_CONTENT,
            blocks=BlockConverter.content_to_blocks(WELCOME_CONTENT),
            updated_at=utc_now(),
            is_favorite=True,
        )
