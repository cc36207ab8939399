"""Page and block data models."""

import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import List, Optional

DEFAULT_TITLE = "Untitled"
DEFAULT_TONE = "default"


class BlockType(str, Enum):
    """Kinds of block a page body can be split into."""
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    TODO = "todo"
    CODE = "code"


@dataclass
class Block:
    """A typed fragment of a page body.

    Attributes:
        block_id: Unique identifier of the block inside its page
        type: Block kind (paragraph, heading, todo, code)
        text: Raw text of the block
        checked: Completion flag, only meaningful for todo blocks
        tone: Cosmetic color tag used by editors
    """
    block_id: str
    type: BlockType = BlockType.PARAGRAPH
    text: str = ""
    checked: bool = False
    tone: str = DEFAULT_TONE


@dataclass
class Page:
    """One note in the notebook.

    A page always carries both a markdown ``content`` string and its
    ``blocks`` representation; the content converter keeps them in step.

    Attributes:
        page_id: Opaque unique identifier, assigned at creation
        title: Display title, never empty
        content: Markdown body
        blocks: Ordered block list mirroring the content
        updated_at: Timezone-aware timestamp of the last mutation
        is_favorite: Whether the page is pinned to the top of lists
        parent_id: Id of the parent page (None for root pages)
    """
    page_id: str
    title: str = DEFAULT_TITLE
    content: str = ""
    blocks: List[Block] = field(default_factory=list)
    updated_at: datetime = field(default_factory=lambda: utc_now())
    is_favorite: bool = False
    parent_id: Optional[str] = None

    def touch(self) -> None:
        """Bump updated_at, guaranteeing it moves strictly forward."""
        now = utc_now()
        if now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_title(title: Optional[str]) -> str:
    """Trim a title and substitute the default for blank input."""
    if title is None:
        return DEFAULT_TITLE
    stripped = title.strip()
    return stripped or DEFAULT_TITLE


class IdAllocator:
    """Hands out timestamp-derived ids that never repeat within a process.

    Ids are microseconds since the epoch, bumped by one whenever the clock
    has not advanced past the previously issued value.

    Example:
        >>> allocator = IdAllocator()
        >>> first, second = allocator.next_id(), allocator.next_id()
        >>> int(second) > int(first)
        True
    """

    def __init__(self):
        self._last = 0

    def next_id(self) -> str:
        candidate = time.time_ns() // 1000
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return str(candidate)


_default_allocator = IdAllocator()


def new_id() -> str:
    """Allocate a fresh id from the process-wide allocator."""
    return _default_allocator.next_id()
