"""
Namespace-aware format stages

ColorizeNamespaceFormat highlights the namespace, CliNamespaceFormatter
renders the single-line ``level | ns | message`` form.
"""

import json
from typing import Optional

from ns_logger.core.log_entry import LogEntry
from ns_logger.core.log_level import MAGENTA_CODE, RESET_CODE
from ns_logger.filters.namespace_filter import DEFAULT_NAMESPACE
from ns_logger.formatters.base_formatter import BaseFormat, BaseFormatter


class ColorizeNamespaceFormat(BaseFormat):
    """Render the namespace in magenta when the entry has one."""

    def __init__(self, color_code: str = MAGENTA_CODE):
        self.color_code = color_code

    def transform(self, entry: LogEntry) -> Optional[LogEntry]:
        if entry.ns:
            entry.ns = f"{self.color_code}{entry.ns}{RESET_CODE}"
        return entry

    def __repr__(self) -> str:
        """String representation."""
        return "ColorizeNamespaceFormat()"


class CliNamespaceFormatter(BaseFormatter):
    """
    Format log entries as ``level | ns | message``.

    The structured extra argument is appended as compact JSON when it is
    non-empty, unless ``json`` is False.
    """

    def __init__(self, json: bool = True):
        """
        Initialize CLI formatter.

        Args:
            json: Append the entry's meta as JSON when non-empty; any falsy
                  value, null included, turns the suffix off

        Example:
            # "info | db | connected | {"status":200}"
            formatter = CliNamespaceFormatter()

            # "info | db | connected"
            formatter = CliNamespaceFormatter(json=False)
        """
        self.include_json = bool(json)

    def format(self, entry: LogEntry) -> str:
        """
        Format log entry in CLI form.

        Args:
            entry: Log entry to format

        Returns:
            Single line string
        """
        message = f"{entry.level_label} | {entry.ns or DEFAULT_NAMESPACE} | {entry.message}"
        if self.include_json and entry.meta:
            message += " | " + json.dumps(entry.meta, separators=(",", ":"), default=str)
        return message

    def __repr__(self) -> str:
        """String representation."""
        return f"CliNamespaceFormatter(json={self.include_json})"
