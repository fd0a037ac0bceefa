"""Per-day audit log for backup runs."""

import logging
import os
import sys
from typing import List, Optional

from .exceptions import LogUnavailableError
from .models import LogEntry
from ..utils.formatters import SEPARATOR, TIMESTAMP_FORMAT

PACKAGE_LOGGER = "mirror_backup"


class RunLogFormatter(logging.Formatter):
    """Renders records as ``YYYY-MM-DD HH:MM:SS - LEVEL - message``."""

    def __init__(self):
        super().__init__(datefmt=TIMESTAMP_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        message = f"{record.levelname} - {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        entry = LogEntry(timestamp=self.formatTime(record, self.datefmt), message=message)
        return entry.format()


class RunLog:
    """Audit trail of one backup run.

    Attaches a file handler and a console handler to the package logger, so
    module loggers below ``mirror_backup`` write into the same log file.
    """

    def __init__(self, log_directory: str, log_file_name: str, level: str = 'INFO',
                 stream=None):
        """Initialize run log.

        Args:
            log_directory: Directory holding the per-day log files.
            log_file_name: Name of this run's log file.
            level: Logging level name.
            stream: Console stream, defaults to stdout.
        """
        self.log_directory = log_directory
        self.log_file_name = log_file_name
        self.level = self._parse_level(level)
        self.stream = stream
        self.logger = logging.getLogger(f"{PACKAGE_LOGGER}.run")
        self._handlers: List[logging.Handler] = []
        self._saved_state = None

    @property
    def log_path(self) -> str:
        return os.path.join(self.log_directory, self.log_file_name)

    def open(self) -> None:
        """Create the log directory and attach handlers.

        Raises:
            LogUnavailableError: If the directory or file cannot be created.
        """
        try:
            # Owner-only access, the log records full paths.
            os.makedirs(self.log_directory, mode=0o700, exist_ok=True)
            file_handler = logging.FileHandler(self.log_path, mode='a', encoding='utf-8')
        except OSError as e:
            raise LogUnavailableError(
                f"Unable to create log file {self.log_path}: {e}"
            ) from e

        console_handler = logging.StreamHandler(self.stream or sys.stdout)
        console_handler.setLevel(self.level)
        # The file always receives run messages, the level only adds DEBUG.
        file_level = min(self.level, logging.INFO)
        file_handler.setLevel(file_level)

        formatter = RunLogFormatter()
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        self._saved_state = (package_logger.level, package_logger.propagate)
        package_logger.setLevel(file_level)
        package_logger.propagate = False
        for handler in (file_handler, console_handler):
            handler.setFormatter(formatter)
            package_logger.addHandler(handler)
            self._handlers.append(handler)

    def close(self) -> None:
        """Detach and close handlers added by ``open``."""
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        for handler in self._handlers:
            package_logger.removeHandler(handler)
            handler.close()
        self._handlers = []
        if self._saved_state is not None:
            package_logger.setLevel(self._saved_state[0])
            package_logger.propagate = self._saved_state[1]
            self._saved_state = None

    def __enter__(self) -> "RunLog":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def log(self, message: str) -> None:
        self.logger.info(message)

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def separator(self) -> None:
        self.logger.info(SEPARATOR)

    @staticmethod
    def _parse_level(level: Optional[str]) -> int:
        numeric_level = getattr(logging, (level or 'INFO').upper(), None)
        if not isinstance(numeric_level, int):
            raise ValueError(f'Invalid log level: {level}')
        return numeric_level
