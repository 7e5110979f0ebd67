"""
Transport base class

A transport owns a format pipeline, an optional minimum level and a
write target. Subclasses only implement ``write_line``.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Union

from ns_logger.core.log_entry import LogEntry
from ns_logger.core.log_level import LogLevel
from ns_logger.filters.level_filter import LevelFilter
from ns_logger.formatters.base_formatter import Pipeline


class Transport(ABC):
    """Base class for log transports."""

    def __init__(
        self,
        format: Optional[Pipeline] = None,
        level: Optional[Union[LogLevel, str]] = None,
    ):
        """
        Initialize transport.

        Args:
            format: Pipeline applied to each entry (default: empty)
            level: Minimum level this transport accepts (default: all)
        """
        self.format = format if format is not None else Pipeline()
        self.level_filter = LevelFilter(min_level=level) if level is not None else None
        self._metrics = {"written": 0, "filtered": 0, "failed": 0}

    @property
    def level(self) -> Optional[LogLevel]:
        """Minimum accepted level, None when unrestricted."""
        return self.level_filter.min_level if self.level_filter else None

    def log(self, entry: LogEntry) -> bool:
        """
        Format and write a log entry.

        The entry is copied first; the caller's entry is never modified.

        Args:
            entry: Log entry to write

        Returns:
            True if the entry was delivered, False if it was filtered out
            or the target could not take it
        """
        if self.level_filter is not None and not self.level_filter.should_log(entry):
            self._metrics["filtered"] += 1
            return False

        formatted = self.format.transform(entry.copy())
        if formatted is None:
            self._metrics["filtered"] += 1
            return False

        line = formatted.rendered if formatted.rendered is not None else str(formatted)
        if self.write_line(line, formatted) is False:
            self._metrics["failed"] += 1
            return False
        self._metrics["written"] += 1
        return True

    @abstractmethod
    def write_line(self, line: str, entry: LogEntry) -> Optional[bool]:
        """
        Write a rendered line to the target.

        Args:
            line: Rendered output, without trailing newline
            entry: The formatted entry the line came from

        Returns:
            False if the line was not delivered (buffered or dropped)
        """
        pass

    def flush(self) -> None:
        """Flush buffered output."""

    def close(self) -> None:
        """Release resources."""

    def get_metrics(self) -> Dict[str, int]:
        """Get transport metrics."""
        return self._metrics.copy()
