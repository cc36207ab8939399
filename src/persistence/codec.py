"""JSON codec for page records.

Encodes the full page collection as one JSON array and decodes it back,
one explicit decode function per record type. A record either decodes to a
fully-populated Page or raises DecodeError; optional fields that are
missing or invalid are silently replaced by defaults.

Record shape:
    {
      "id": "1718000000000000",
      "title": "Groceries",
      "content": "- milk",
      "blocks": [{"id": "...", "type": "paragraph", "text": "- milk",
                  "checked": false, "tone": "default"}],
      "updatedAt": "2024-06-10T08:00:00+00:00",
      "isFavorite": false,
      "parentId": null
    }
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from src.content_converter.block_converter import BlockConverter
from src.models.errors import DecodeError
from src.models.page import (
    DEFAULT_TONE,
    Block,
    BlockType,
    Page,
    new_id,
    normalize_title,
    utc_now,
)

logger = logging.getLogger(__name__)


def encode_block(block: Block) -> Dict[str, Any]:
    return {
        'id': block.block_id,
        'type': block.type.value,
        'text': block.text,
        'checked': block.checked,
        'tone': block.tone,
    }


def encode_page(page: Page) -> Dict[str, Any]:
    """Convert a page into its JSON-ready record."""
    return {
        'id': page.page_id,
        'title': page.title,
        'content': page.content,
        'blocks': [encode_block(block) for block in page.blocks],
        'updatedAt': page.updated_at.isoformat(),
        'isFavorite': page.is_favorite,
        'parentId': page.parent_id,
    }


def encode_pages(pages: Sequence[Page]) -> str:
    """Serialize the full page sequence to one JSON array string."""
    return json.dumps([encode_page(page) for page in pages], ensure_ascii=False)


def decode_pages(raw: str) -> List[Page]:
    """Parse a JSON array string into pages.

    Args:
        raw: JSON text produced by encode_pages (or an older version)

    Returns:
        Pages in stored order

    Raises:
        DecodeError: If the text is not JSON, not an array, or a record is invalid
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Malformed JSON: {e}") from e

    if not isinstance(data, list):
        raise DecodeError(f"Expected a JSON array of pages, got {type(data).__name__}")

    return [decode_page(record, index) for index, record in enumerate(data)]


def decode_page(record: Any, index: Optional[int] = None) -> Page:
    """Decode one page record.

    The id is mandatory. Blocks are migrated from content when absent, and
    content is reconstructed from blocks when absent.

    Raises:
        DecodeError: If the record is not an object or has no string id
    """
    if not isinstance(record, dict):
        raise DecodeError(
            f"Page record must be an object, got {type(record).__name__}",
            record_index=index
        )

    page_id = record.get('id')
    if not isinstance(page_id, str) or not page_id:
        raise DecodeError("Missing or invalid page id", record_index=index, field='id')

    raw_title = record.get('title')
    title = normalize_title(raw_title if isinstance(raw_title, str) else None)

    raw_content = record.get('content')
    content = raw_content if isinstance(raw_content, str) else None

    raw_blocks = record.get('blocks')
    blocks = None
    if isinstance(raw_blocks, list):
        blocks = [_decode_block(item) for item in raw_blocks if isinstance(item, dict)]

    if content is None and blocks is None:
        content = ""
    if blocks is None:
        blocks = BlockConverter.content_to_blocks(content)
    if content is None:
        content = BlockConverter.blocks_to_markdown(blocks)

    raw_parent = record.get('parentId')
    parent_id = raw_parent if isinstance(raw_parent, str) and raw_parent else None

    return Page(
        page_id=page_id,
        title=title,
        content=content,
        blocks=blocks,
        updated_at=_parse_timestamp(record.get('updatedAt')),
        is_favorite=record.get('isFavorite') is True,
        parent_id=parent_id,
    )


def _decode_block(record: Dict[str, Any]) -> Block:
    raw_id = record.get('id')
    block_id = raw_id if isinstance(raw_id, str) and raw_id else new_id()

    try:
        block_type = BlockType(record.get('type'))
    except ValueError:
        block_type = BlockType.PARAGRAPH

    raw_text = record.get('text')
    raw_tone = record.get('tone')
    return Block(
        block_id=block_id,
        type=block_type,
        text=raw_text if isinstance(raw_text, str) else "",
        checked=record.get('checked') is True,
        tone=raw_tone if isinstance(raw_tone, str) and raw_tone else DEFAULT_TONE,
    )


def _parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp, falling back to the current time.

    Naive timestamps (as written by older clients) are local time.
    """
    if not isinstance(value, str) or not value.strip():
        return utc_now()
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug(f"Unparsable timestamp '{value}', using current time")
        return utc_now()
    if parsed.tzinfo is None:
        # Local wall-clock time, normalized to UTC like every other timestamp
        parsed = parsed.astimezone(timezone.utc)
    return parsed
