"""
Mirror Backup - dated, versioned directory backups on top of rsync.

This package mirrors a source directory into ``{target}/current``, moves files
the mirror overwrites or deletes into ``{target}/{YYYY-MM-DD}``, logs each run
and emails the operator with the outcome.
"""

__version__ = "1.0.0"

from .core.orchestrator import BackupOrchestrator
from .core.validator import PathValidator
from .reporters.email_reporter import EmailReporter

__all__ = ["BackupOrchestrator", "PathValidator", "EmailReporter"]
