"""
Log formatters module

Provides the format stages transports chain into their pipelines.
"""

from ns_logger.formatters.base_formatter import BaseFormat, BaseFormatter, Pipeline
from ns_logger.formatters.json_formatter import JSONFormatter
from ns_logger.formatters.namespace_formatter import (
    CliNamespaceFormatter,
    ColorizeNamespaceFormat,
)
from ns_logger.formatters.text_formatter import TextFormatter
from ns_logger.formatters.timestamp_formatter import ColorizeFormat, TimestampFormat

__all__ = [
    "BaseFormat",
    "BaseFormatter",
    "Pipeline",
    "CliNamespaceFormatter",
    "ColorizeNamespaceFormat",
    "ColorizeFormat",
    "JSONFormatter",
    "TextFormatter",
    "TimestampFormat",
]
