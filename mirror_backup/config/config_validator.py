"""Configuration validation for mirror backup."""

import logging
import re
from typing import Any, Dict

from ..core.exceptions import ConfigurationError

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+$')


class ConfigValidator:
    """Validates mirror backup configuration."""

    KNOWN_SECTIONS = ['backup', 'logging', 'notifications']
    TRANSPORTS = ['mutt', 'smtp']
    REQUIRED_SMTP_FIELDS = ['smtp_server', 'from_address']

    def validate(self, config: Dict[str, Any]) -> None:
        """Validate configuration data.

        Args:
            config: Configuration dictionary to validate.

        Raises:
            ConfigurationError: If configuration is invalid.
        """
        self._validate_structure(config)
        self._validate_backup_config(config.get('backup', {}))
        self._validate_logging_config(config.get('logging', {}))
        self._validate_notification_config(config.get('notifications', {}))

    def _validate_structure(self, config: Dict[str, Any]) -> None:
        if not isinstance(config, dict):
            raise ConfigurationError("Configuration must be a mapping")

        for section in self.KNOWN_SECTIONS:
            if section in config and not isinstance(config[section], dict):
                raise ConfigurationError(f"Configuration section '{section}' must be a mapping")

    def _validate_backup_config(self, backup_config: Dict[str, Any]) -> None:
        if not isinstance(backup_config.get('dry_run', False), bool):
            raise ConfigurationError("backup.dry_run must be true or false")

        rsync_path = backup_config.get('rsync_path', 'rsync')
        if not isinstance(rsync_path, str) or not rsync_path:
            raise ConfigurationError("backup.rsync_path cannot be empty")

    def _validate_logging_config(self, logging_config: Dict[str, Any]) -> None:
        directory = logging_config.get('directory', 'logs')
        if not isinstance(directory, str) or not directory:
            raise ConfigurationError("logging.directory cannot be empty")

        level = logging_config.get('level', 'INFO')
        if not isinstance(getattr(logging, str(level).upper(), None), int):
            raise ConfigurationError(f"Invalid log level: {level}")

    def _validate_notification_config(self, notification_config: Dict[str, Any]) -> None:
        recipient = notification_config.get('recipient')
        if recipient is not None and not EMAIL_PATTERN.match(str(recipient)):
            raise ConfigurationError(f"Invalid notification recipient: {recipient}")

        if not isinstance(notification_config.get('strict', False), bool):
            raise ConfigurationError("notifications.strict must be true or false")

        transport = notification_config.get('transport', 'mutt')
        if transport not in self.TRANSPORTS:
            raise ConfigurationError(
                f"Invalid notification transport: {transport} (expected one of {self.TRANSPORTS})"
            )

        if transport == 'smtp':
            self._validate_smtp_config(notification_config.get('smtp'))

    def _validate_smtp_config(self, smtp_config: Any) -> None:
        """Validate SMTP transport configuration.

        Args:
            smtp_config: SMTP configuration dictionary.

        Raises:
            ConfigurationError: If SMTP configuration is invalid.
        """
        if not isinstance(smtp_config, dict):
            raise ConfigurationError("notifications.smtp must be configured when transport is smtp")

        missing_fields = [field for field in self.REQUIRED_SMTP_FIELDS if field not in smtp_config]
        if missing_fields:
            raise ConfigurationError(f"SMTP configuration missing required fields: {missing_fields}")

        if 'smtp_port' in smtp_config:
            try:
                port = int(smtp_config['smtp_port'])
                if not (1 <= port <= 65535):
                    raise ValueError()
            except (ValueError, TypeError):
                raise ConfigurationError(f"SMTP configuration has invalid port: {smtp_config['smtp_port']}")

        if not EMAIL_PATTERN.match(str(smtp_config['from_address'])):
            raise ConfigurationError(f"Invalid from address: {smtp_config['from_address']}")
