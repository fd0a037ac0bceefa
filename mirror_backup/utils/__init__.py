"""Utility modules for mirror backup."""

from .formatters import SEPARATOR, format_command, format_date_stamp

__all__ = ["SEPARATOR", "format_command", "format_date_stamp"]
