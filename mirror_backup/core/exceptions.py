"""Exceptions raised during a backup run.

Each exception carries the process exit code that a scheduler sees when the
run is aborted for that reason.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes, one per abort cause."""
    SUCCESS = 0
    USAGE = 1
    SAME_PATH = 2
    SOURCE_UNAVAILABLE = 3
    TARGET_UNAVAILABLE = 4
    SYNC_TOOL_UNAVAILABLE = 5
    NOTIFICATION_SEND_FAILED = 6
    NOTIFIER_UNAVAILABLE = 7
    SYNC_FAILED = 8
    LOG_UNAVAILABLE = 9


class BackupError(Exception):
    """Base exception for all backup errors."""
    exit_code = ExitCode.USAGE


# --- Configuration Errors ---

class ConfigurationError(BackupError):
    """Raised when the configuration file or environment is invalid."""
    exit_code = ExitCode.USAGE


class UsageError(BackupError):
    """Raised when the command line has the wrong number of arguments."""
    exit_code = ExitCode.USAGE


class LogUnavailableError(BackupError):
    """Raised when the log directory or log file cannot be created."""
    exit_code = ExitCode.LOG_UNAVAILABLE


# --- Precondition Errors ---

class ValidationError(BackupError):
    """Base class for rejected source/target paths."""
    pass


class EmptyPathError(ValidationError):
    exit_code = ExitCode.USAGE


class SamePathError(ValidationError):
    exit_code = ExitCode.SAME_PATH


class SourceUnavailableError(ValidationError):
    exit_code = ExitCode.SOURCE_UNAVAILABLE


class TargetUnavailableError(ValidationError):
    exit_code = ExitCode.TARGET_UNAVAILABLE


# --- Dependency and Execution Errors ---

class DependencyError(BackupError):
    """Base class for missing external tools."""
    pass


class SyncToolUnavailableError(DependencyError):
    exit_code = ExitCode.SYNC_TOOL_UNAVAILABLE


class ExecutionError(BackupError):
    """Base class for failures of the synchronization step."""
    pass


class SyncFailedError(ExecutionError):
    exit_code = ExitCode.SYNC_FAILED


# --- Notification Errors ---

class NotificationError(BackupError):
    """Base class for notification failures under the strict policy."""
    pass


class NotifierUnavailableError(NotificationError):
    exit_code = ExitCode.NOTIFIER_UNAVAILABLE


class NotificationSendFailedError(NotificationError):
    exit_code = ExitCode.NOTIFICATION_SEND_FAILED
