"""Data models for a backup run."""

import os
from dataclasses import dataclass

from .exceptions import BackupError, ExitCode


@dataclass
class BackupRequest:
    """Everything one run needs, resolved once at startup."""
    source_path: str
    target_path: str
    dry_run: bool
    date_stamp: str
    log_directory: str
    log_file_name: str

    @property
    def current_path(self) -> str:
        """Live mirror of the source."""
        return os.path.join(self.target_path, "current")

    @property
    def backup_path(self) -> str:
        """Dated directory receiving files this run overwrites or deletes.

        Absolute, since rsync resolves a relative backup directory against
        the destination rather than the working directory.
        """
        return os.path.join(os.path.abspath(self.target_path), self.date_stamp)

    @property
    def log_path(self) -> str:
        return os.path.join(self.log_directory, self.log_file_name)


@dataclass
class BackupOutcome:
    """Result of a run."""
    succeeded: bool
    exit_code: int
    message: str

    @classmethod
    def success(cls, message: str) -> "BackupOutcome":
        return cls(succeeded=True, exit_code=int(ExitCode.SUCCESS), message=message)

    @classmethod
    def from_error(cls, error: BackupError) -> "BackupOutcome":
        return cls(succeeded=False, exit_code=int(error.exit_code), message=str(error))


@dataclass
class LogEntry:
    """A single line of the run log."""
    timestamp: str
    message: str

    def format(self) -> str:
        return f"{self.timestamp} - {self.message}"
