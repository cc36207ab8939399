"""Data models for CLI operations.

This module defines the exit codes and the application configuration used
by the CLI module. Models use dataclasses, following the patterns in
src/models/page.py.
"""

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): General error (config issues, unknown pages, storage failures)
    - DECODE_ERROR (2): Stored or imported page data could not be decoded
    - AUTH_ERROR (3): The backup token was rejected
    - NETWORK_ERROR (4): Backup API unreachable or the request failed
    - NOT_CONFIGURED (5): Backup sync is not configured for the operation

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    DECODE_ERROR = 2
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
    NOT_CONFIGURED = 5


@dataclass
class AppConfig:
    """Application settings read from <data-dir>/config.yaml.

    Attributes:
        storage_file: Key-value store file name, relative to the data directory
        api_url: Base URL of the GitHub REST API
        backup_file_name: Name of the file holding the backup inside the gist
        gist_description: Description given to a newly created backup gist
        request_timeout: Per-request timeout for the gist API, in seconds
    """
    storage_file: str = "store.yaml"
    api_url: str = "https://api.github.com"
    backup_file_name: str = "notion_lite_backup.json"
    gist_description: str = "Notion Lite backup"
    request_timeout: int = 30
