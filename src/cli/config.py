"""YAML application configuration loading and validation.

This module handles loading the notebook settings from
<data-dir>/config.yaml. Every field is optional; a missing file yields
the defaults.
"""

from typing import Any, Dict

import yaml

from .errors import ConfigError, ConfigFilesystemError
from .models import AppConfig


class ConfigLoader:
    """Handles configuration file loading and validation.

    Configuration file structure:
        storage_file: "store.yaml"
        api_url: "https://api.github.com"
        backup_file_name: "notion_lite_backup.json"
        gist_description: "Notion Lite backup"
        request_timeout: 30
    """

    DEFAULT_CONFIG_FILE = 'config.yaml'

    STRING_FIELDS = ('storage_file', 'api_url', 'backup_file_name', 'gist_description')

    @classmethod
    def load(cls, config_path: str) -> AppConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            AppConfig with parsed configuration (defaults if the file is missing)

        Raises:
            ConfigFilesystemError: If the file exists but cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            return AppConfig()
        except PermissionError:
            raise ConfigFilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except Exception as e:
            raise ConfigFilesystemError(
                config_path,
                'read',
                str(e)
            )

        if not content.strip():
            return AppConfig()

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        if config_dict is None:
            return AppConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> AppConfig:
        """Parse and validate configuration dictionary.

        Raises:
            ConfigError: If configuration is invalid
        """
        defaults = AppConfig()
        values: Dict[str, Any] = {}

        for name in cls.STRING_FIELDS:
            raw = config_dict.get(name, getattr(defaults, name))
            if not isinstance(raw, str):
                raise ConfigError(
                    f"Field '{name}' must be a string, got {type(raw).__name__}",
                    name
                )
            if not raw.strip():
                raise ConfigError(
                    f"Field '{name}' cannot be empty",
                    name
                )
            values[name] = raw.strip()

        timeout = config_dict.get('request_timeout', defaults.request_timeout)
        try:
            timeout = int(timeout)
        except (ValueError, TypeError) as e:
            raise ConfigError(
                f"Invalid field type: {str(e)}",
                'request_timeout'
            )
        if timeout < 1:
            raise ConfigError(
                f"Field 'request_timeout' must be at least 1, got {timeout}",
                'request_timeout'
            )
        values['request_timeout'] = timeout

        return AppConfig(**values)
