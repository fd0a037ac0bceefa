"""Configuration management for the mirror backup system."""

import copy
import os
from typing import Any, Dict, Mapping, Optional

import yaml

from .config_validator import ConfigValidator
from ..core.exceptions import ConfigurationError


class ConfigManager:
    """Resolves configuration from an optional YAML file and the environment.

    Environment variables take precedence over the file, and the file over
    built-in defaults. A missing config file is not an error.
    """

    DEFAULT_CONFIG_LOCATIONS = [
        "backup.yaml",
        "backup.yml",
        os.path.expanduser("~/.mirror-backup/config.yaml"),
        os.path.expanduser("~/.mirror-backup/config.yml"),
        "/etc/mirror-backup/config.yaml",
        "/etc/mirror-backup/config.yml"
    ]

    DEFAULTS = {
        'backup': {
            'dry_run': False,
            'rsync_path': 'rsync'
        },
        'logging': {
            'directory': 'logs',
            'level': 'INFO'
        },
        'notifications': {
            'recipient': 'root@localhost',
            'strict': False,
            'transport': 'mutt',
            'mutt_path': 'mutt'
        }
    }

    def __init__(self, config_path: Optional[str] = None,
                 environ: Optional[Mapping[str, str]] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to config file. Falls back to the
                        BACKUP_CONFIG variable, then the default locations.
            environ: Environment mapping, defaults to ``os.environ``.
        """
        self.environ = os.environ if environ is None else environ
        self.config_path = config_path or self.environ.get('BACKUP_CONFIG') or None
        self.config_data: Dict[str, Any] = {}
        self.validator = ConfigValidator()

    def load_config(self) -> Dict[str, Any]:
        """Load configuration.

        Returns:
            Dictionary containing configuration data.

        Raises:
            ConfigurationError: If the config file is missing (when named
                explicitly), unreadable or invalid.
        """
        config_file = self._find_config_file()
        self.config_data = {}

        if config_file:
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    self.config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in config file {config_file}: {e}")
            except OSError as e:
                raise ConfigurationError(f"Error reading config file {config_file}: {e}")

        if not isinstance(self.config_data, dict):
            raise ConfigurationError(f"Config file {config_file} must contain a mapping")

        self._set_defaults()
        self._apply_environment()
        self.validator.validate(self.config_data)

        return self.config_data

    def _find_config_file(self) -> Optional[str]:
        """Find configuration file.

        Returns:
            Path to configuration file, or None if there is none.

        Raises:
            ConfigurationError: If an explicitly named file does not exist.
        """
        if self.config_path:
            if os.path.exists(self.config_path):
                return self.config_path
            raise ConfigurationError(f"Config file not found: {self.config_path}")

        for location in self.DEFAULT_CONFIG_LOCATIONS:
            if os.path.exists(location):
                return location

        return None

    def _set_defaults(self):
        """Set default values for optional configuration parameters."""
        for section, section_defaults in copy.deepcopy(self.DEFAULTS).items():
            if self.config_data.get(section) is None:
                self.config_data[section] = {}
            elif not isinstance(self.config_data[section], dict):
                raise ConfigurationError(f"Configuration section '{section}' must be a mapping")
            for key, value in section_defaults.items():
                if key not in self.config_data[section]:
                    self.config_data[section][key] = value

    def _apply_environment(self):
        """Override file values with environment variables."""
        env = self.environ

        if 'DRY_RUN' in env:
            self.config_data['backup']['dry_run'] = env['DRY_RUN'] == 'true'

        if env.get('LOG_DIR'):
            self.config_data['logging']['directory'] = env['LOG_DIR']

        if env.get('LOG_LEVEL'):
            self.config_data['logging']['level'] = env['LOG_LEVEL']

        if env.get('EMAIL_RECIPIENT'):
            self.config_data['notifications']['recipient'] = env['EMAIL_RECIPIENT']

        if 'NOTIFY_STRICT' in env:
            self.config_data['notifications']['strict'] = env['NOTIFY_STRICT'] == 'true'

    def get_backup_config(self) -> Dict[str, Any]:
        """Get backup configuration.

        Returns:
            Backup configuration dictionary.
        """
        return self.config_data.get('backup', {})

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration.

        Returns:
            Logging configuration dictionary.
        """
        return self.config_data.get('logging', {})

    def get_notification_config(self) -> Dict[str, Any]:
        """Get notification configuration.

        Returns:
            Notification configuration dictionary.
        """
        return self.config_data.get('notifications', {})
