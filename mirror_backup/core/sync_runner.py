"""Synchronization tool invocation."""

import logging
import os
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from .exceptions import SyncToolUnavailableError
from .models import BackupRequest

OutputCallback = Callable[[str], None]


def build_sync_command(request: BackupRequest, executable: str = 'rsync') -> List[str]:
    """Build the rsync command for a request.

    The live tree is mirrored into ``{target}/current``; files the run would
    overwrite or delete there are moved into ``{target}/{date_stamp}``.

    Args:
        request: The backup request.
        executable: rsync executable name or path.

    Returns:
        Command as a list of tokens, ready for ``subprocess`` without a shell.
    """
    command = [
        executable,
        '--archive',
        '--verbose',
        '--backup',
        f'--backup-dir={request.backup_path}',
        '--delete',
    ]
    if request.dry_run:
        command.append('--dry-run')

    command.append('--')

    # Trailing separator copies the contents of source, not source itself.
    command.append(os.path.join(request.source_path, ''))
    command.append(request.current_path)
    return command


class SynchronizationRunner(ABC):
    """Runs a synchronization command and reports its exit status."""

    name = 'rsync'
    executable = 'rsync'

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if the tool can be executed on this host."""

    @abstractmethod
    def run(self, command: List[str], on_output: Optional[OutputCallback] = None) -> int:
        """Run ``command`` to completion and return its exit status."""


class RsyncRunner(SynchronizationRunner):
    """Runs rsync as a blocking subprocess."""

    name = 'rsync'

    def __init__(self, rsync_path: str = 'rsync'):
        self.executable = rsync_path
        self.logger = logging.getLogger(__name__)

    def is_available(self) -> bool:
        resolved = shutil.which(self.executable)
        return resolved is not None and os.access(resolved, os.X_OK)

    def run(self, command: List[str], on_output: Optional[OutputCallback] = None) -> int:
        """Run rsync, streaming each output line to ``on_output``.

        Output is passed through untouched; only the exit status is
        interpreted. No timeout is applied.

        Raises:
            SyncToolUnavailableError: If the executable cannot be started.
        """
        self.logger.debug(f"Starting {command[0]}")
        try:
            process = subprocess.Popen(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors='replace',
            )
        except OSError as e:
            raise SyncToolUnavailableError(f"Unable to start {command[0]}: {e}") from e

        with process:
            for line in process.stdout:
                line = line.rstrip('\n')
                if line and on_output:
                    on_output(line)
            returncode = process.wait()

        self.logger.debug(f"{command[0]} exited with code {returncode}")
        return returncode
