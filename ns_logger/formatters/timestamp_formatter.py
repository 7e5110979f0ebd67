"""Stages that decorate an entry before rendering: timestamps and level colors"""

from typing import Optional

from ns_logger.core.log_entry import LogEntry
from ns_logger.formatters.base_formatter import BaseFormat


class TimestampFormat(BaseFormat):
    """Add the entry's creation time to ``entry.fields["timestamp"]``."""

    def __init__(self, format: Optional[str] = None):
        """
        Args:
            format: strftime pattern (default: ISO 8601)
        """
        self.format = format

    def transform(self, entry: LogEntry) -> Optional[LogEntry]:
        if self.format:
            entry.fields["timestamp"] = entry.timestamp.strftime(self.format)
        else:
            entry.fields["timestamp"] = entry.timestamp.isoformat()
        return entry

    def __repr__(self) -> str:
        """String representation."""
        return f"TimestampFormat(format={self.format!r})"


class ColorizeFormat(BaseFormat):
    """Color the level label, and optionally the message, with the level's ANSI code."""

    def __init__(self, level: bool = True, message: bool = False):
        self.level = level
        self.message = message

    def transform(self, entry: LogEntry) -> Optional[LogEntry]:
        color = entry.level.color_code
        reset = entry.level.reset_code
        if self.level:
            entry.fields["level"] = f"{color}{entry.level.label}{reset}"
        if self.message:
            entry.message = f"{color}{entry.message}{reset}"
        return entry

    def __repr__(self) -> str:
        """String representation."""
        return f"ColorizeFormat(level={self.level}, message={self.message})"
