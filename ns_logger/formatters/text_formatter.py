"""
Text formatter with customizable template

Formats log entries using a template string with placeholders
"""

from ns_logger.core.log_entry import LogEntry
from ns_logger.formatters.base_formatter import BaseFormatter


class TextFormatter(BaseFormatter):
    """
    Format log entries using a customizable template.

    Supports placeholders for the entry's core fields, its meta and
    fields added by earlier stages.
    """

    DEFAULT_TEMPLATE = "[{timestamp}] [{level:8}] [{ns}] {message}"

    def __init__(self, template: str = None, timestamp_format: str = "%Y-%m-%d %H:%M:%S.%f"):
        """
        Initialize text formatter.

        Args:
            template: Format template with placeholders.
                     Available placeholders:
                     - {timestamp}: Timestamp (a "timestamp" stage value wins)
                     - {level}: Log level label
                     - {level:8}: Log level with padding
                     - {ns}: Namespace ("default" when unset)
                     - {message}: Log message
                     - {logger}: Logger name
                     - any key of the entry's meta or fields
            timestamp_format: strftime format for timestamps

        Example:
            # Default format
            formatter = TextFormatter()

            # Custom format
            formatter = TextFormatter("{level} - {ns}: {message}")
        """
        self.template = template or self.DEFAULT_TEMPLATE
        self.timestamp_format = timestamp_format

    def format(self, entry: LogEntry) -> str:
        """
        Format log entry using the template.

        Args:
            entry: Log entry to format

        Returns:
            Formatted string
        """
        timestamp_str = entry.timestamp.strftime(self.timestamp_format)
        if self.timestamp_format.endswith("%f"):
            timestamp_str = timestamp_str[:-3]  # Milliseconds

        format_dict = dict(entry.meta)
        format_dict.update(entry.fields)
        format_dict.setdefault("timestamp", timestamp_str)
        format_dict.update({
            "level": entry.level_label,
            "ns": entry.ns or "default",
            "message": entry.message,
            "logger": entry.logger_name,
        })

        try:
            return self.template.format(**format_dict)
        except (KeyError, IndexError) as e:
            # Fallback if template has unknown placeholder
            return f"[FORMAT ERROR: {e}] {entry.message}"

    def __repr__(self) -> str:
        """String representation."""
        return f"TextFormatter(template='{self.template}')"
