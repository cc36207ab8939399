"""Gist client library for notebook backups.

This package provides Python abstractions over the GitHub gist REST API,
with typed errors, rate-limit retries and token resolution.
"""

from .errors import (
    TransportError,
    InvalidCredentialsError,
    GistNotFoundError,
    APIUnreachableError,
    APIAccessError,
    BackupFileNotFoundError,
    EmptyBackupError,
)

__all__ = [
    "TransportError",
    "InvalidCredentialsError",
    "GistNotFoundError",
    "APIUnreachableError",
    "APIAccessError",
    "BackupFileNotFoundError",
    "EmptyBackupError",
]
