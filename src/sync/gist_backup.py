"""Push and pull of the page collection to a single-file gist.

The remote gist holds one file (``notion_lite_backup.json`` by default)
whose content is exactly the JSON array written to local storage. Push is a
full overwrite and pull is read-only; there is no versioning, so the last
writer wins.
"""

import logging
from typing import List, Optional, Sequence

from src.gist_client.api_wrapper import GistAPIWrapper
from src.gist_client.errors import (
    APIAccessError,
    BackupFileNotFoundError,
    EmptyBackupError,
)
from src.models.page import Page
from src.persistence.codec import decode_pages, encode_pages

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = 'notion_lite_backup.json'
DEFAULT_DESCRIPTION = 'Notion Lite backup'


class GistBackup:
    """Transfers the encoded page array to and from one gist file.

    Example:
        >>> backup = GistBackup(GistAPIWrapper())
        >>> gist_id = backup.push(token, pages)
        >>> restored = backup.pull(token, gist_id)
    """

    def __init__(
        self,
        api: GistAPIWrapper,
        file_name: str = DEFAULT_FILE_NAME,
        description: str = DEFAULT_DESCRIPTION
    ):
        self._api = api
        self.file_name = file_name
        self.description = description

    def push(
        self,
        token: str,
        pages: Sequence[Page],
        store_id: Optional[str] = None
    ) -> str:
        """Upload pages, creating the backup gist when store_id is unknown.

        Args:
            token: Bearer token
            pages: Pages to back up
            store_id: Existing backup gist id, if any

        Returns:
            Id of the gist that now holds the backup

        Raises:
            TransportError: If creation or update does not report success
        """
        files = {self.file_name: encode_pages(pages)}

        if not store_id:
            gist = self._api.create_gist(
                token, files, description=self.description, public=False
            )
            new_id = gist.get('id')
            if not isinstance(new_id, str) or not new_id:
                raise APIAccessError("Create gist succeeded but no gist id returned")
            logger.info(f"Created backup gist {new_id} with {len(pages)} page(s)")
            return new_id

        self._api.update_gist(token, store_id, files)
        logger.info(f"Updated backup gist {store_id} with {len(pages)} page(s)")
        return store_id

    def pull(self, token: str, store_id: str) -> List[Page]:
        """Download and decode the backed-up pages.

        Args:
            token: Bearer token
            store_id: Backup gist id

        Returns:
            Decoded pages (never empty)

        Raises:
            TransportError: If the fetch fails, the file is missing, or the content is empty
            DecodeError: If the content is not a valid page array
        """
        gist = self._api.get_gist(token, store_id)
        files = gist.get('files') or {}
        file_entry = files.get(self.file_name) if isinstance(files, dict) else None
        if not isinstance(file_entry, dict):
            raise BackupFileNotFoundError(store_id, self.file_name)

        content = file_entry.get('content')
        raw_url = file_entry.get('raw_url')
        if not content and isinstance(raw_url, str) and raw_url:
            logger.debug("Backup content empty in gist payload, fetching raw_url")
            content = self._api.get_raw_content(token, raw_url)

        if not isinstance(content, str) or not content:
            raise EmptyBackupError("Backup content is empty")

        pages = decode_pages(content)
        if not pages:
            raise EmptyBackupError("Backup has no pages")

        logger.info(f"Pulled {len(pages)} page(s) from gist {store_id}")
        return pages
