"""Sample pages and page arrays for testing.

Pages are built with fixed timestamps so ordering assertions are stable.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from src.content_converter.block_converter import BlockConverter
from src.models.page import Page

BASE_TIME = datetime(2024, 6, 10, 12, 0, 0, tzinfo=timezone.utc)


def make_page(
    page_id: str,
    title: str = "Untitled",
    content: str = "",
    minutes: int = 0,
    is_favorite: bool = False,
    parent_id: Optional[str] = None,
) -> Page:
    """Build a page updated `minutes` after BASE_TIME."""
    return Page(
        page_id=page_id,
        title=title,
        content=content,
        blocks=BlockConverter.content_to_blocks(content),
        updated_at=BASE_TIME + timedelta(minutes=minutes),
        is_favorite=is_favorite,
        parent_id=parent_id,
    )


def make_tree():
    """A -> B -> C plus an unrelated root D.

    D is the most recently updated root, so it lists first.
    """
    return [
        make_page("A", "Alpha", minutes=1),
        make_page("B", "Beta", minutes=2, parent_id="A"),
        make_page("C", "Gamma", minutes=3, parent_id="B"),
        make_page("D", "Delta", minutes=4),
    ]


SAMPLE_PAGES_JSON = """
[
  {
    "id": "1718006400000000",
    "title": "Groceries",
    "content": "- milk\\n- eggs",
    "blocks": [
      {"id": "b1", "type": "paragraph", "text": "- milk", "checked": false, "tone": "default"},
      {"id": "b2", "type": "paragraph", "text": "- eggs", "checked": false, "tone": "default"}
    ],
    "updatedAt": "2024-06-10T08:00:00+00:00",
    "isFavorite": true,
    "parentId": null
  },
  {
    "id": "1718006400000001",
    "title": "Dairy",
    "content": "",
    "blocks": [],
    "updatedAt": "2024-06-10T09:00:00Z",
    "isFavorite": false,
    "parentId": "1718006400000000"
  }
]
"""

# Written before blocks existed
LEGACY_CONTENT_ONLY_JSON = """
[{"id": "p1", "title": "Old", "content": "line one\\nline two", "updatedAt": "2023-01-01T00:00:00"}]
"""

# Written before content was stored next to blocks
LEGACY_BLOCKS_ONLY_JSON = """
[{"id": "p2", "title": "Tasks", "blocks": [
  {"id": "h", "type": "heading", "text": "Today"},
  {"id": "t1", "type": "todo", "text": "Buy milk", "checked": true},
  {"id": "t2", "type": "todo", "text": "Call Bob", "checked": false},
  {"id": "c", "type": "code", "text": "print(1)"},
  {"id": "x", "type": "mystery", "text": "plain"}
]}]
"""
