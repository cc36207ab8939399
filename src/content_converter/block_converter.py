"""Block converter for content string ⇄ block list conversion.

This module provides the deterministic conversions used to keep a page's
markdown ``content`` and its ``blocks`` in step, and to migrate records
written by older versions that carry only one of the two representations.
"""

from typing import Iterable, List

from ..models.page import Block, BlockType, new_id


class BlockConverter:
    """Converts between markdown content strings and block lists.

    Content → blocks is a plain line split: every line becomes one paragraph
    block, so empty content yields exactly one empty paragraph.

    Blocks → content renders each block to a markdown fragment:
        heading   → ``# text``
        todo      → ``- [ ] text`` or ``- [x] text``
        code      → fenced block
        paragraph → raw text
    Each fragment is followed by a blank line and the result is trimmed.
    """

    @staticmethod
    def content_to_blocks(content: str) -> List[Block]:
        """Split content into one paragraph block per line.

        Args:
            content: Markdown content string

        Returns:
            List of paragraph blocks (at least one)
        """
        return [
            Block(block_id=new_id(), type=BlockType.PARAGRAPH, text=line)
            for line in (content or "").split("\n")
        ]

    @staticmethod
    def blocks_to_markdown(blocks: Iterable[Block]) -> str:
        """Reconstruct a markdown content string from blocks.

        Args:
            blocks: Blocks in display order

        Returns:
            Markdown content string
        """
        fragments = []
        for block in blocks:
            fragments.append(BlockConverter.block_to_markdown(block))
            fragments.append("")
        return "\n".join(fragments).strip()

    @staticmethod
    def flatten_text(content: str, blocks: Iterable[Block]) -> str:
        """Flatten a page body into one searchable string."""
        parts = [content or ""]
        parts.extend(block.text for block in blocks if block.text)
        return "\n".join(parts)

    @staticmethod
    def block_to_markdown(block: Block) -> str:
        """Render a single block as a markdown fragment."""
        if block.type == BlockType.HEADING:
            return f"# {block.text}"
        if block.type == BlockType.TODO:
            mark = "x" if block.checked else " "
            return f"- [{mark}] {block.text}"
        if block.type == BlockType.CODE:
            return f"```\n{block.text}\n```"
        return block.text
