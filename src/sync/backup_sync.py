"""Backup sync driven by the stored sync configuration.

Combines SyncConfigManager and GistBackup into the push/pull state machine:

    UNCONFIGURED --setup--> CONFIGURED_NO_REMOTE --first push--> CONFIGURED_WITH_REMOTE

Push is allowed in both configured states; pull requires a remote.
"""

import logging
from typing import List, Sequence

from src.models.page import Page
from .config_manager import SyncConfigManager
from .errors import SyncNotConfiguredError
from .gist_backup import GistBackup
from .models import SyncConfig, SyncStatus

logger = logging.getLogger(__name__)


class BackupSync:
    """Pushes and pulls pages using the saved token and gist id.

    Concurrent calls are not serialized; the last completion wins.

    Example:
        >>> sync = BackupSync(config_manager, GistBackup(GistAPIWrapper()))
        >>> gist_id = sync.push(pages)
    """

    def __init__(self, config_manager: SyncConfigManager, backup: GistBackup):
        self._config_manager = config_manager
        self._backup = backup

    def status(self) -> SyncConfig:
        return self._config_manager.load()

    def push(self, pages: Sequence[Page]) -> str:
        """Back up pages, creating the remote store on first use.

        The new store id is recorded only after a successful create, so a
        failed push leaves the configuration unchanged.

        Raises:
            SyncNotConfiguredError: If no token is configured
            TransportError: If the remote call fails
        """
        config = self._config_manager.load()
        if config.status == SyncStatus.UNCONFIGURED:
            raise SyncNotConfiguredError("push", "access token")

        store_id = self._backup.push(config.token, pages, config.store_id)
        if store_id != config.store_id:
            self._config_manager.record_store_id(store_id)
        return store_id

    def pull(self) -> List[Page]:
        """Fetch the backed-up pages without touching local state.

        Raises:
            SyncNotConfiguredError: Unless both token and store id are configured
            TransportError: If the remote call fails or the backup is empty
            DecodeError: If the backup is malformed
        """
        config = self._config_manager.load()
        if config.status == SyncStatus.UNCONFIGURED:
            raise SyncNotConfiguredError("pull", "access token")
        if config.status == SyncStatus.CONFIGURED_NO_REMOTE:
            raise SyncNotConfiguredError("pull", "backup gist id")

        return self._backup.pull(config.token, config.store_id)
