"""Core backup functionality."""

from .orchestrator import BackupOrchestrator
from .validator import PathValidator
from .run_log import RunLog
from .sync_runner import RsyncRunner, SynchronizationRunner, build_sync_command
from .models import BackupOutcome, BackupRequest, LogEntry

__all__ = [
    "BackupOrchestrator",
    "PathValidator",
    "RunLog",
    "RsyncRunner",
    "SynchronizationRunner",
    "build_sync_command",
    "BackupOutcome",
    "BackupRequest",
    "LogEntry",
]
