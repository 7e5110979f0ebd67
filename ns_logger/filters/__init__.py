"""
Log filters module

Provides the filters transports compose into their pipelines.
"""

from ns_logger.filters.base_filter import BaseFilter
from ns_logger.filters.level_filter import LevelFilter
from ns_logger.filters.namespace_filter import NamespaceFilter

__all__ = [
    "BaseFilter",
    "LevelFilter",
    "NamespaceFilter",
]
