"""Formatting utilities for run logs and notifications."""

import shlex
from datetime import date
from typing import Sequence

SEPARATOR = "-" * 40

TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'
DATE_STAMP_FORMAT = '%Y-%m-%d'


def format_date_stamp(day: date) -> str:
    """Format the date used for log file and backup directory names.

    Args:
        day: Date of the run.

    Returns:
        Date string such as ``2024-05-01``.
    """
    return day.strftime(DATE_STAMP_FORMAT)


def format_command(command: Sequence[str]) -> str:
    """Render a token list as a shell-quoted string for display only."""
    return shlex.join(command)
