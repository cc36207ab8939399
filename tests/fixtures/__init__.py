"""Test fixtures for notebook tests.

This module provides:
- Page builders with fixed timestamps
- Sample JSON page arrays, including legacy record shapes
- Gist API payload builders for backup tests
"""

from .sample_pages import (
    BASE_TIME,
    make_page,
    make_tree,
    SAMPLE_PAGES_JSON,
    LEGACY_CONTENT_ONLY_JSON,
    LEGACY_BLOCKS_ONLY_JSON,
)
from .gist_payloads import FakeGistAPI, gist_response

__all__ = [
    "BASE_TIME",
    "make_page",
    "make_tree",
    "SAMPLE_PAGES_JSON",
    "LEGACY_CONTENT_ONLY_JSON",
    "LEGACY_BLOCKS_ONLY_JSON",
    "FakeGistAPI",
    "gist_response",
]
