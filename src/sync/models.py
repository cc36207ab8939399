"""Data models for backup sync configuration.

This module defines the sync configuration record and the three states it
can be in, following the dataclass patterns used across the project.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SyncStatus(str, Enum):
    """Lifecycle of the sync configuration.

    - UNCONFIGURED: no token available
    - CONFIGURED_NO_REMOTE: token known, no backup gist created yet
    - CONFIGURED_WITH_REMOTE: token and backup gist id known
    """
    UNCONFIGURED = "unconfigured"
    CONFIGURED_NO_REMOTE = "configured_no_remote"
    CONFIGURED_WITH_REMOTE = "configured_with_remote"


@dataclass
class SyncConfig:
    """Token and remote store id used for backups.

    Attributes:
        token: Bearer token for the gist API (None if not configured)
        store_id: Id of the backup gist (None until the first push)

    Example:
        >>> SyncConfig(token="ghp_x").status
        <SyncStatus.CONFIGURED_NO_REMOTE: 'configured_no_remote'>
    """
    token: Optional[str] = None
    store_id: Optional[str] = None

    @property
    def status(self) -> SyncStatus:
        if not self.token:
            return SyncStatus.UNCONFIGURED
        if not self.store_id:
            return SyncStatus.CONFIGURED_NO_REMOTE
        return SyncStatus.CONFIGURED_WITH_REMOTE
