"""Unit tests for models module (Page, Block, ids and DecodeError)."""

from datetime import timedelta

import pytest

from src.models.errors import DecodeError, NotebookError
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


class TestNormalizeTitle:
    """Test cases for normalize_title."""

    def test_trims_whitespace(self):
        assert normalize_title("  Groceries \n") == "Groceries"

    def test_blank_becomes_default(self):
        """Whitespace-only titles fall back to 'Untitled'."""
        assert normalize_title("   ") == DEFAULT_TITLE
        assert normalize_title("") == DEFAULT_TITLE

    def test_none_becomes_default(self):
        assert normalize_title(None) == "Untitled"


class TestIdAllocator:
    """Test cases for IdAllocator."""

    def test_ids_are_numeric_strings(self):
        assert IdAllocator().next_id().isdigit()

    def test_ids_strictly_increase(self):
        """Consecutive ids never repeat even within one clock tick."""
        allocator = IdAllocator()
        ids = [int(allocator.next_id()) for _ in range(1000)]

        assert ids == sorted(ids)
        assert len(set(ids)) == len(ids)

    def test_module_allocator_unique(self):
        assert len({new_id() for _ in range(200)}) == 200


class TestPage:
    """Test cases for the Page dataclass."""

    def test_defaults(self):
        page = Page(page_id="1")

        assert page.title == "Untitled"
        assert page.content == ""
        assert page.blocks == []
        assert page.is_favorite is False
        assert page.parent_id is None
        assert page.updated_at.tzinfo is not None

    def test_touch_moves_forward(self):
        """touch() advances updated_at even if the clock reads earlier."""
        future = utc_now() + timedelta(hours=1)
        page = Page(page_id="1", updated_at=future)

        page.touch()

        assert page.updated_at > future

    def test_block_defaults(self):
        block = Block(block_id="b")

        assert block.type == BlockType.PARAGRAPH
        assert block.text == ""
        assert block.checked is False
        assert block.tone == "default"


class TestDecodeError:
    """Test cases for DecodeError messages."""

    def test_is_notebook_error(self):
        assert issubclass(DecodeError, NotebookError)

    def test_message_with_record_and_field(self):
        error = DecodeError("Missing or invalid page id", record_index=2, field="id")

        assert str(error) == "Invalid page record 2 (field 'id'): Missing or invalid page id"
        assert error.record_index == 2
        assert error.field == "id"

    def test_message_without_context(self):
        with pytest.raises(DecodeError, match="Invalid page data: Malformed JSON"):
            raise DecodeError("Malformed JSON")
