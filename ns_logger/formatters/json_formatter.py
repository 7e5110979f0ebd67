"""
JSON formatter for structured logging

Formats log entries as JSON objects
"""

import json
from ns_logger.core.log_entry import LogEntry
from ns_logger.formatters.base_formatter import BaseFormatter


class JSONFormatter(BaseFormatter):
    """
    Format log entries as JSON objects.

    Produces structured log output suitable for log aggregation systems.
    """

    def __init__(
        self,
        include_meta: bool = True,
        include_logger: bool = False,
        indent: int = None,
        ensure_ascii: bool = False
    ):
        """
        Initialize JSON formatter.

        Args:
            include_meta: Merge the entry's meta into the object
            include_logger: Include the logger name when set
            indent: JSON indentation (None for compact, 2 for readable)
            ensure_ascii: Escape non-ASCII characters

        Example:
            # {"level": "info", "message": "connected", "ns": "db"}
            formatter = JSONFormatter()

            # Pretty-printed JSON
            formatter = JSONFormatter(indent=2)
        """
        self.include_meta = include_meta
        self.include_logger = include_logger
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def format(self, entry: LogEntry) -> str:
        """
        Format log entry as JSON.

        Args:
            entry: Log entry to format

        Returns:
            JSON string
        """
        if self.include_meta:
            log_dict = entry.to_dict()
        else:
            log_dict = dict(entry.fields)
            log_dict["level"] = entry.level.label
            log_dict["message"] = entry.message
            if entry.ns is not None:
                log_dict["ns"] = entry.ns

        if self.include_logger and entry.logger_name:
            log_dict["logger"] = entry.logger_name

        return json.dumps(
            log_dict,
            indent=self.indent,
            ensure_ascii=self.ensure_ascii,
            default=str,
        )

    def __repr__(self) -> str:
        """String representation."""
        return f"JSONFormatter(indent={self.indent})"
