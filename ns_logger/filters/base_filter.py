"""
Base filter interface
"""

from abc import ABC, abstractmethod
from typing import Optional

from ns_logger.core.log_entry import LogEntry


class BaseFilter(ABC):
    """
    Abstract base class for log filters.

    Filters determine whether a log entry should be processed or discarded.
    A filter is also a pipeline stage: ``transform`` passes the entry
    through or returns None to drop it.
    """

    @abstractmethod
    def should_log(self, entry: LogEntry) -> bool:
        """
        Determine if a log entry should be logged.

        Args:
            entry: The log entry to filter

        Returns:
            True if the entry should be logged, False otherwise
        """
        pass

    def transform(self, entry: LogEntry) -> Optional[LogEntry]:
        """Pipeline stage form of ``should_log``."""
        return entry if self.should_log(entry) else None

    def __call__(self, entry: LogEntry) -> bool:
        """Allow filters to be callable."""
        return self.should_log(entry)
