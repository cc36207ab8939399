"""Persistence library for the page collection.

This package provides the JSON page-record codec, the file-backed
key-value store and the repository that ties them together.
"""

from .codec import decode_page, decode_pages, encode_page, encode_pages
from .errors import PersistenceError, StorageError
from .kv_store import KeyValueStore
from .repository import STORAGE_KEY, PageRepository

__all__ = [
    'KeyValueStore',
    'PageRepository',
    'PersistenceError',
    'STORAGE_KEY',
    'StorageError',
    'decode_page',
    'decode_pages',
    'encode_page',
    'encode_pages',
]
