"""File-backed key-value store for string values.

This module is the local analogue of a preferences store: one YAML
document on disk mapping string keys to string values. Every write
rewrites the whole document through a temporary file that is then moved
over the original.

File structure:
    notion_lite_pages_v2: '[{"id": "1718000000000000", ...}]'
    notion_lite_github_token_v1: ghp_...
"""

import logging
import os
import tempfile
from typing import Dict, Optional

import yaml

from .errors import StorageError

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Stores string values under string keys in a single YAML file.

    A missing or empty file is an empty store. Reads always go to disk so
    several store instances pointing at the same file stay consistent.

    Example:
        >>> store = KeyValueStore("/tmp/notion-lite/store.yaml")
        >>> store.set("greeting", "hello")
        >>> store.get("greeting")
        'hello'
    """

    def __init__(self, file_path: str):
        """Initialize the store.

        Args:
            file_path: Path to the YAML file backing the store
        """
        self.file_path = file_path

    def get(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if absent."""
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        """Store value under key, overwriting any previous value."""
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        """Delete key if present."""
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def _read(self) -> Dict[str, str]:
        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            return {}
        except PermissionError:
            raise StorageError(self.file_path, 'read', 'Permission denied')
        except OSError as e:
            raise StorageError(self.file_path, 'read', str(e))

        if not content.strip():
            return {}

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise StorageError(self.file_path, 'read', f"Invalid YAML syntax: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise StorageError(
                self.file_path,
                'read',
                f"Store must be a YAML dictionary, got {type(data).__name__}"
            )

        return {str(key): str(value) for key, value in data.items() if value is not None}

    def _write(self, data: Dict[str, str]) -> None:
        yaml_str = yaml.safe_dump(
            data,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=True,
            width=float('inf'),
        )

        directory = os.path.dirname(self.file_path) or '.'
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            raise StorageError(directory, 'create_directory', str(e))

        temp_path = None
        try:
            fd, temp_path = tempfile.mkstemp(
                prefix='.store-', suffix='.tmp', dir=directory
            )
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
            os.replace(temp_path, self.file_path)
            temp_path = None
        except PermissionError:
            raise StorageError(self.file_path, 'write', 'Permission denied')
        except OSError as e:
            raise StorageError(self.file_path, 'write', str(e))
        finally:
            if temp_path and os.path.exists(temp_path):
                try:
                    os.remove(temp_path)
                except OSError as e:
                    logger.warning(f"Failed to remove temp file {temp_path}: {e}")

        logger.debug(f"Wrote {len(data)} key(s) to {self.file_path}")
