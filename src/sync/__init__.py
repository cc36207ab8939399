"""Backup sync library.

This package provides gist-based push/pull of the page collection and the
persisted sync configuration that drives it.
"""

from .backup_sync import BackupSync
from .config_manager import SyncConfigManager
from .errors import SyncError, SyncNotConfiguredError
from .gist_backup import GistBackup
from .models import SyncConfig, SyncStatus

__all__ = [
    'BackupSync',
    'GistBackup',
    'SyncConfig',
    'SyncConfigManager',
    'SyncError',
    'SyncNotConfiguredError',
    'SyncStatus',
]
