"""YAML configuration loading and validation.

This module handles loading and saving client configuration from YAML files.
The configuration holds connection settings only; the password is always
taken from the environment.
"""

import os
from typing import Any, Dict

import yaml

from src.models.client_config import ClientConfig
from .errors import ConfigError, ConfigFilesystemError

DEFAULT_CONFIG_PATH = ".dokuwiki-client.yaml"


class ConfigLoader:
    """Handles configuration file loading, validation, and saving.

    Configuration file structure:
        url: "https://wiki.example.com/lib/exe/xmlrpc.php"
        user: "bot"
        timeout: 30
        verify_ssl: true

    Every field is optional.
    """

    # Allowed fields and their required YAML types
    FIELD_TYPES = {
        'url': str,
        'user': str,
        'timeout': int,
        'verify_ssl': bool,
    }

    @classmethod
    def load(cls, config_path: str) -> ClientConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            ClientConfig object with parsed configuration

        Raises:
            ConfigFilesystemError: If file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigFilesystemError(
                config_path,
                'read',
                'Configuration file not found'
            )
        except PermissionError:
            raise ConfigFilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise ConfigFilesystemError(
                config_path,
                'read',
                str(e)
            )

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        # An empty file means "all defaults"
        if config_dict is None:
            return ClientConfig()

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls._parse_config(config_dict)

    @classmethod
    def save(cls, config_path: str, config: ClientConfig) -> None:
        """Save configuration to a YAML file.

        Args:
            config_path: Path to the YAML configuration file
            config: ClientConfig object to save

        Raises:
            ConfigFilesystemError: If file cannot be written
        """
        config_dict: Dict[str, Any] = {}
        # Only include connection fields that are set
        if config.url is not None:
            config_dict['url'] = config.url
        if config.user is not None:
            config_dict['user'] = config.user
        config_dict['timeout'] = config.timeout
        config_dict['verify_ssl'] = config.verify_ssl

        yaml_str = yaml.safe_dump(
            config_dict,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise ConfigFilesystemError(
                    config_dir,
                    'create_directory',
                    str(e)
                )

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise ConfigFilesystemError(
                config_path,
                'write',
                'Permission denied'
            )
        except OSError as e:
            raise ConfigFilesystemError(
                config_path,
                'write',
                str(e)
            )

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> ClientConfig:
        """Parse and validate configuration dictionary.

        Args:
            config_dict: Raw configuration dictionary from YAML

        Returns:
            Validated ClientConfig object

        Raises:
            ConfigError: If configuration is invalid
        """
        unknown_fields = set(config_dict.keys()) - set(cls.FIELD_TYPES)
        if unknown_fields:
            raise ConfigError(
                f"Unknown fields: {', '.join(sorted(str(f) for f in unknown_fields))}"
            )

        for field_name, expected_type in cls.FIELD_TYPES.items():
            if field_name not in config_dict:
                continue
            value = config_dict[field_name]
            # bool is an int subclass, keep "timeout: true" out
            if not isinstance(value, expected_type) or (
                expected_type is int and isinstance(value, bool)
            ):
                raise ConfigError(
                    f"must be {expected_type.__name__}, got {type(value).__name__}",
                    config_field=field_name
                )

        timeout = config_dict.get('timeout', ClientConfig.timeout)
        if timeout <= 0:
            raise ConfigError(
                f"must be a positive number of seconds, got {timeout}",
                config_field='timeout'
            )

        url = config_dict.get('url')
        if url is not None and not url.startswith(('http://', 'https://')):
            raise ConfigError(
                f"must be an http(s) URL, got '{url}'",
                config_field='url'
            )

        return ClientConfig(
            url=url,
            user=config_dict.get('user'),
            timeout=timeout,
            verify_ssl=config_dict.get('verify_ssl', ClientConfig.verify_ssl),
        )
