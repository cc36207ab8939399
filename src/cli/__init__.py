"""Command-line interface for the notion-lite notebook.

This package provides the `notion-lite` CLI tool: page listing and preview,
page editing, JSON export/import and gist backup push/pull, with terminal
output and error handling shared by every command.
"""

from .config import ConfigLoader
from .models import AppConfig, ExitCode
from .errors import CLIError, ConfigError, ConfigFilesystemError

__all__ = [
    'ConfigLoader',
    'AppConfig',
    'ExitCode',
    'CLIError',
    'ConfigError',
    'ConfigFilesystemError',
]
