"""Content conversion module for content string ⇄ block list conversion.

This module provides the BlockConverter used to keep a page's markdown
content and its block list consistent, and to migrate legacy records.
"""

from .block_converter import BlockConverter

__all__ = ['BlockConverter']
