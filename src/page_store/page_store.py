"""In-memory page collection with tree, search and favorite/recency views.

The store owns the ordered page list and is the only place pages are
created, edited and removed. Derived views (sidebar listing, search
results, current selection) are recomputed on every call.
"""

import logging
from typing import Iterator, List, Optional, Sequence, Set

from src.content_converter.block_converter import BlockConverter
from src.models.page import Block, BlockType, Page, new_id, normalize_title, utc_now
from .errors import EmptyCollectionError, PageNotFoundError
from .hierarchy import HierarchyBuilder, VisiblePage, display_sorted

logger = logging.getLogger(__name__)


class PageStore:
    """Ordered collection of pages.

    The collection is never emptied by the store: deleting the last page,
    or a subtree that covers every page, is a no-op.

    Example:
        >>> store = PageStore()
        >>> page = store.create()
        >>> store.edit(page.page_id, title="  Groceries ")
        >>> [entry.page.title for entry in store.visible("rocer")]
        ['Groceries']
    """

    def __init__(self, pages: Optional[Sequence[Page]] = None):
        self._pages: List[Page] = list(pages or [])

    @property
    def pages(self) -> List[Page]:
        """Pages in storage order (a copy of the list, same page objects)."""
        return list(self._pages)

    def __len__(self) -> int:
        return len(self._pages)

    def __iter__(self) -> Iterator[Page]:
        return iter(list(self._pages))

    def get(self, page_id: Optional[str]) -> Optional[Page]:
        """Return the first page with the given id, or None."""
        if page_id is None:
            return None
        for page in self._pages:
            if page.page_id == page_id:
                return page
        return None

    def require(self, page_id: str) -> Page:
        page = self.get(page_id)
        if page is None:
            raise PageNotFoundError(page_id)
        return page

    def replace_all(self, pages: Sequence[Page]) -> None:
        """Swap the whole collection, e.g. after an import or a pull.

        Raises:
            EmptyCollectionError: If pages is empty
        """
        if not pages:
            raise EmptyCollectionError("replace_all")
        self._pages = list(pages)
        logger.info(f"Replaced page collection ({len(self._pages)} pages)")

    def create(self, parent_id: Optional[str] = None) -> Page:
        """Create an empty "Untitled" page.

        Root pages are inserted at the front of the list; children are
        appended. An unknown parent id is dropped and the page becomes a root.

        Args:
            parent_id: Optional id of the parent page

        Returns:
            The new page
        """
        if parent_id is not None and self.get(parent_id) is None:
            logger.warning(
                f"Parent page {parent_id} does not exist; creating a root page"
            )
            parent_id = None

        page = Page(
            page_id=new_id(),
            content="",
            blocks=BlockConverter.content_to_blocks(""),
            updated_at=utc_now(),
            parent_id=parent_id,
        )
        if parent_id is None:
            self._pages.insert(0, page)
        else:
            self._pages.append(page)

        logger.debug(f"Created page {page.page_id} (parent={parent_id})")
        return page

    def delete(self, page_id: str) -> Set[str]:
        """Delete a page together with all of its descendants.

        Args:
            page_id: Id of the subtree root to delete

        Returns:
            Set of removed page ids (empty when nothing was removed)
        """
        if len(self._pages) <= 1:
            logger.debug("Refusing to delete the last remaining page")
            return set()
        if self.get(page_id) is None:
            logger.debug(f"Delete ignored: page {page_id} not found")
            return set()

        closure = HierarchyBuilder(self._pages).descendants(page_id)
        remaining = [page for page in self._pages if page.page_id not in closure]
        if not remaining:
            logger.debug(
                f"Refusing to delete subtree of {page_id}: it covers every page"
            )
            return set()

        self._pages = remaining
        logger.info(f"Deleted {len(closure)} page(s) rooted at {page_id}")
        return closure

    def edit(
        self,
        page_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
        blocks: Optional[Sequence[Block]] = None,
    ) -> Page:
        """Apply committed edits to a page and bump its timestamp.

        Fields left as None are not touched. When content is given the block
        list is rebuilt from it; when blocks are given the content is
        rebuilt from them. Content wins if both are supplied.

        Raises:
            PageNotFoundError: If page_id is unknown
        """
        page = self.require(page_id)
        if title is not None:
            page.title = normalize_title(title)
        if content is not None:
            page.content = content
            page.blocks = BlockConverter.content_to_blocks(content)
        elif blocks is not None:
            page.blocks = list(blocks)
            page.content = BlockConverter.blocks_to_markdown(page.blocks)
        page.touch()
        return page

    def append_block(self, page_id: str, block: Block) -> Page:
        """Append a block and its markdown fragment to a page.

        The existing content text is kept as is and the fragment follows it
        after a blank line. A page holding only the single empty paragraph
        of a fresh page starts its block list over.

        Raises:
            PageNotFoundError: If page_id is unknown
        """
        page = self.require(page_id)
        blocks = list(page.blocks)
        if len(blocks) == 1 and blocks[0].type == BlockType.PARAGRAPH and not blocks[0].text:
            blocks = []
        page.blocks = blocks + [block]

        fragment = BlockConverter.block_to_markdown(block)
        existing = page.content.rstrip()
        page.content = f"{existing}\n\n{fragment}" if existing else fragment
        page.touch()
        logger.debug(f"Appended {block.type.value} block to page {page_id}")
        return page

    def toggle_favorite(self, page_id: str) -> Page:
        """Flip the favorite flag of a page.

        Raises:
            PageNotFoundError: If page_id is unknown
        """
        page = self.require(page_id)
        page.is_favorite = not page.is_favorite
        page.touch()
        return page

    def visible(self, query: str = "") -> List[VisiblePage]:
        """Return the pages to display, paired with their depth.

        With a query, returns a flat favorite/recency-sorted list of pages
        whose title or flattened body contains the query (case-insensitive).
        Without one, returns the pre-order walk of the page forest.
        """
        builder = HierarchyBuilder(self._pages)
        needle = (query or "").strip().lower()
        if not needle:
            return builder.preorder()

        matches = [page for page in self._pages if _matches(page, needle)]
        return [
            VisiblePage(page, builder.depth_of(page))
            for page in display_sorted(matches)
        ]

    def selected(self, page_id: Optional[str], query: str = "") -> Optional[Page]:
        """Resolve the current selection against the visible pages.

        Returns the page with page_id if it is visible, else the first
        visible page, else None.
        """
        visible = self.visible(query)
        for entry in visible:
            if entry.page.page_id == page_id:
                return entry.page
        return visible[0].page if visible else None


def _matches(page: Page, needle: str) -> bool:
    if needle in page.title.lower():
        return True
    text = BlockConverter.flatten_text(page.content, page.blocks)
    return needle in text.lower()
