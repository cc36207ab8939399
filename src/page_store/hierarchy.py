"""Page hierarchy helpers built on flat parent pointers.

Pages live in one flat list and refer to their parent by id. This module
resolves those references through an adjacency map built once per query,
instead of embedding child pointers in the pages themselves.
"""

import logging
from collections import deque
from typing import Dict, Iterable, List, NamedTuple, Sequence, Set

from src.models.page import Page

logger = logging.getLogger(__name__)


class VisiblePage(NamedTuple):
    """A page paired with its display depth in the sidebar."""
    page: Page
    depth: int


def display_sorted(pages: Iterable[Page]) -> List[Page]:
    """Sort pages favorites first, then most recently updated first.

    Two stable passes keep the original order for exact ties.
    """
    by_recency = sorted(pages, key=lambda p: p.updated_at, reverse=True)
    return sorted(by_recency, key=lambda p: not p.is_favorite)


class HierarchyBuilder:
    """Builds parent/child views over a flat page list.

    Only edges to parents that exist in the list are kept; a page whose
    parent id is unknown is treated as a root.

    Example:
        >>> builder = HierarchyBuilder(pages)
        >>> for entry in builder.preorder():
        ...     print("  " * entry.depth + entry.page.title)
    """

    def __init__(self, pages: Sequence[Page]):
        self._pages = list(pages)
        self._by_id: Dict[str, Page] = {}
        for page in self._pages:
            # First match wins for duplicate ids
            self._by_id.setdefault(page.page_id, page)
        self._children: Dict[str, List[Page]] = {}
        self._roots: List[Page] = []
        for page in self._pages:
            if self.has_parent(page):
                self._children.setdefault(page.parent_id, []).append(page)
            else:
                self._roots.append(page)

    def has_parent(self, page: Page) -> bool:
        """Return True if the page's parent id refers to an existing page."""
        return page.parent_id is not None and page.parent_id in self._by_id

    def depth_of(self, page: Page) -> int:
        """Count existing ancestors of a page.

        The walk stops when it revisits an id, logging a data-integrity
        warning; the cyclic data itself is left untouched.
        """
        depth = 0
        seen: Set[str] = {page.page_id}
        current = page
        while self.has_parent(current):
            parent_id = current.parent_id
            if parent_id in seen:
                logger.warning(
                    f"Parent cycle detected while computing depth of page "
                    f"{page.page_id} (revisited {parent_id})"
                )
                break
            seen.add(parent_id)
            current = self._by_id[parent_id]
            depth += 1
        return depth

    def descendants(self, page_id: str) -> Set[str]:
        """Return the page id plus all transitive descendants.

        Computed breadth-first until no new ids are added.
        """
        closure: Set[str] = {page_id}
        queue = deque([page_id])
        while queue:
            current = queue.popleft()
            for child in self._children.get(current, []):
                if child.page_id not in closure:
                    closure.add(child.page_id)
                    queue.append(child.page_id)
        return closure

    def preorder(self) -> List[VisiblePage]:
        """Depth-first traversal of the forest with sorted sibling groups.

        Pages that cannot be reached from any root (members of a parent
        cycle) are appended afterwards at depth 0 so they stay reachable.
        """
        result: List[VisiblePage] = []
        visited: Set[int] = set()

        def visit(page: Page, depth: int) -> None:
            if id(page) in visited:
                return
            visited.add(id(page))
            result.append(VisiblePage(page, depth))
            for child in display_sorted(self._children.get(page.page_id, [])):
                visit(child, depth + 1)

        for root in display_sorted(self._roots):
            visit(root, 0)

        unreached = [page for page in self._pages if id(page) not in visited]
        if unreached:
            logger.warning(
                f"{len(unreached)} page(s) unreachable from any root "
                f"(parent cycle); listing them at top level"
            )
            for page in display_sorted(unreached):
                visit(page, 0)

        return result
