"""Unit tests for persistence.codec module."""

import json
import time
from datetime import datetime, timezone

import pytest

from src.models.errors import DecodeError
from src.models.page import BlockType
from src.persistence.codec import decode_page, decode_pages, encode_page, encode_pages
from tests.fixtures.sample_pages import (
    LEGACY_BLOCKS_ONLY_JSON,
    LEGACY_CONTENT_ONLY_JSON,
    SAMPLE_PAGES_JSON,
    make_page,
    make_tree,
)


class TestEncode:
    """Test cases for page encoding."""

    def test_record_keys(self):
        page = make_page("A", "Alpha", "hi", is_favorite=True, parent_id="P")

        record = encode_page(page)

        assert record == {
            'id': "A",
            'title': "Alpha",
            'content': "hi",
            'blocks': [{
                'id': page.blocks[0].block_id,
                'type': "paragraph",
                'text': "hi",
                'checked': False,
                'tone': "default",
            }],
            'updatedAt': "2024-06-10T12:00:00+00:00",
            'isFavorite': True,
            'parentId': "P",
        }

    def test_encode_pages_is_json_array(self):
        data = json.loads(encode_pages(make_tree()))

        assert [r['id'] for r in data] == ["A", "B", "C", "D"]

    def test_non_ascii_kept_verbatim(self):
        assert "Café" in encode_pages([make_page("A", "Café")])

    def test_round_trip_preserves_pages(self):
        pages = make_tree()
        pages[0].is_favorite = True

        assert decode_pages(encode_pages(pages)) == pages


class TestDecode:
    """Test cases for page decoding."""

    def test_decodes_sample_array(self):
        pages = decode_pages(SAMPLE_PAGES_JSON)

        assert [p.title for p in pages] == ["Groceries", "Dairy"]
        assert pages[0].is_favorite is True
        assert pages[0].content == "- milk\n- eggs"
        assert [b.block_id for b in pages[0].blocks] == ["b1", "b2"]
        assert pages[1].parent_id == "1718006400000000"
        assert pages[1].updated_at == datetime(2024, 6, 10, 9, 0, tzinfo=timezone.utc)

    def test_content_only_record_gets_paragraph_blocks(self):
        page = decode_pages(LEGACY_CONTENT_ONLY_JSON)[0]

        assert [b.text for b in page.blocks] == ["line one", "line two"]
        assert all(b.type == BlockType.PARAGRAPH for b in page.blocks)

    def test_naive_timestamp_read_as_local_time(self):
        page = decode_pages(LEGACY_CONTENT_ONLY_JSON)[0]

        assert page.updated_at == datetime(2023, 1, 1).astimezone(timezone.utc)
        assert page.updated_at.tzinfo == timezone.utc

    @pytest.mark.skipif(not hasattr(time, "tzset"), reason="needs time.tzset")
    def test_naive_and_aware_timestamps_sort_by_instant(self, monkeypatch):
        try:
            with monkeypatch.context() as mp:
                # POSIX TZ: two hours east of UTC
                mp.setenv("TZ", "UTC-2")
                time.tzset()
                pages = decode_pages(
                    '[{"id": "1", "updatedAt": "2024-06-10T13:00:00"},'
                    ' {"id": "2", "updatedAt": "2024-06-10T11:30:00+00:00"}]'
                )
        finally:
            time.tzset()

        assert pages[0].updated_at == datetime(2024, 6, 10, 11, 0, tzinfo=timezone.utc)
        assert pages[0].updated_at < pages[1].updated_at

    def test_blocks_only_record_gets_markdown_content(self):
        page = decode_pages(LEGACY_BLOCKS_ONLY_JSON)[0]

        assert page.content == (
            "# Today\n\n- [x] Buy milk\n\n- [ ] Call Bob\n\n```\nprint(1)\n```\n\nplain"
        )
        assert page.blocks[-1].type == BlockType.PARAGRAPH
        assert page.blocks[1].checked is True

    def test_missing_optional_fields_get_defaults(self):
        page = decode_page({'id': "x", 'isFavorite': "yes", 'parentId': ""})

        assert page.title == "Untitled"
        assert page.content == ""
        assert len(page.blocks) == 1
        assert page.is_favorite is False
        assert page.parent_id is None
        assert page.updated_at.tzinfo is not None

    def test_invalid_timestamp_uses_now(self):
        page = decode_page({'id': "x", 'updatedAt': "yesterday"})

        assert page.updated_at.year >= 2024

    def test_blank_title_normalized(self):
        assert decode_page({'id': "x", 'title': "  "}).title == "Untitled"

    def test_missing_id_raises(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_pages('[{"id": "ok"}, {"title": "no id"}]')

        assert exc_info.value.record_index == 1
        assert exc_info.value.field == "id"

    def test_non_object_record_raises(self):
        with pytest.raises(DecodeError, match="must be an object"):
            decode_pages('["just a string"]')

    def test_not_an_array_raises(self):
        with pytest.raises(DecodeError, match="Expected a JSON array"):
            decode_pages('{"id": "x"}')

    def test_malformed_json_raises(self):
        with pytest.raises(DecodeError, match="Malformed JSON"):
            decode_pages('[{"id": ')

    def test_empty_array_decodes_to_empty_list(self):
        assert decode_pages("[]") == []
