"""Precondition checks on the source and target directories."""

import logging
import os

from .exceptions import (
    EmptyPathError,
    SamePathError,
    SourceUnavailableError,
    TargetUnavailableError,
)


class PathValidator:
    """Rejects unsafe source/target pairs before anything is copied.

    Checks run in a fixed order (empty, same location, source, target) and
    stop at the first failure. Nothing on disk is created or removed.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def validate(self, source: str, target: str) -> None:
        """Validate a source/target pair.

        Args:
            source: Directory to back up.
            target: Directory receiving the mirror and dated backups.

        Raises:
            EmptyPathError: If either path is empty.
            SamePathError: If both paths name the same filesystem entity.
            SourceUnavailableError: If source is missing or unreadable.
            TargetUnavailableError: If target is missing or unwritable.
        """
        self._check_not_empty(source, target)
        self._check_distinct(source, target)
        self._check_source(source)
        self._check_target(target)
        self.logger.debug(f"Validated source '{source}' and target '{target}'")

    def _check_not_empty(self, source: str, target: str) -> None:
        if not source or not target:
            raise EmptyPathError(
                "The source and target directories must not be empty. "
                "Please provide both paths."
            )

    def _check_distinct(self, source: str, target: str) -> None:
        # Compared by device and inode so symlinked aliases are caught.
        if not (os.path.exists(source) and os.path.exists(target)):
            return
        if os.path.samefile(source, target):
            raise SamePathError(
                f"The source directory '{source}' and target directory '{target}' "
                "refer to the same location. Please choose a different target."
            )

    def _check_source(self, source: str) -> None:
        if not os.path.isdir(source) or not os.access(source, os.R_OK):
            raise SourceUnavailableError(
                f"The source directory '{source}' does not exist or is not readable. "
                "Please check the path and permissions."
            )

    def _check_target(self, target: str) -> None:
        if not os.path.isdir(target) or not os.access(target, os.W_OK):
            raise TargetUnavailableError(
                f"The target directory '{target}' does not exist or is not writable. "
                "Please check the path and permissions."
            )
