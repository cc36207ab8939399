"""Data models for notebook pages and blocks."""

from src.models.errors import NotebookError, DecodeError
from src.models.page import (
    DEFAULT_TITLE,
    Block,
    BlockType,
    IdAllocator,
    Page,
    new_id,
    normalize_title,
    utc_now,
)

__all__ = [
    'DEFAULT_TITLE',
    'Block',
    'BlockType',
    'DecodeError',
    'IdAllocator',
    'NotebookError',
    'Page',
    'new_id',
    'normalize_title',
    'utc_now',
]
