"""Persistence of the sync configuration.

The token and the backup gist id are stored as two keys of the same
key-value store that holds the pages. A token found in the environment
is used when none has been saved.
"""

import logging
from typing import Optional

from src.gist_client.auth import Authenticator
from src.persistence.kv_store import KeyValueStore
from .models import SyncConfig

logger = logging.getLogger(__name__)

TOKEN_KEY = 'notion_lite_github_token_v1'
STORE_ID_KEY = 'notion_lite_github_gist_id_v1'


class SyncConfigManager:
    """Loads and saves SyncConfig through a KeyValueStore.

    Example:
        >>> manager = SyncConfigManager(KeyValueStore("store.yaml"))
        >>> manager.save("ghp_token", "")
        >>> manager.load().status
        <SyncStatus.CONFIGURED_NO_REMOTE: 'configured_no_remote'>
    """

    def __init__(
        self,
        store: KeyValueStore,
        authenticator: Optional[Authenticator] = None
    ):
        self._store = store
        self._authenticator = authenticator or Authenticator()

    def load(self) -> SyncConfig:
        """Return the current sync configuration."""
        token = self._authenticator.resolve_token(self._store.get(TOKEN_KEY))
        store_id = (self._store.get(STORE_ID_KEY) or "").strip() or None
        return SyncConfig(token=token, store_id=store_id)

    def save(self, token: str, store_id: Optional[str]) -> SyncConfig:
        """Persist a token and an optional store id.

        Both values are trimmed; a blank store id removes the stored one.
        """
        self._store.set(TOKEN_KEY, (token or "").strip())
        if store_id is None or not store_id.strip():
            self._store.remove(STORE_ID_KEY)
        else:
            self._store.set(STORE_ID_KEY, store_id.strip())
        logger.info("Sync configuration saved")
        return self.load()

    def record_store_id(self, store_id: str) -> None:
        """Remember the id of a newly created backup gist."""
        self._store.set(STORE_ID_KEY, store_id.strip())
        logger.info(f"Recorded backup gist id {store_id}")
