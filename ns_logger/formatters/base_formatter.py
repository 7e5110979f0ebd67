"""
Format stage interfaces and the pipeline that composes them
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Iterator, List, Optional

from ns_logger.core.log_entry import LogEntry


class BaseFormat(ABC):
    """
    Abstract base class for format stages.

    A stage mutates the entry in place and returns it, or returns None
    to drop the entry for the transport that owns the pipeline.
    """

    @abstractmethod
    def transform(self, entry: LogEntry) -> Optional[LogEntry]:
        """
        Apply this stage to a log entry.

        Args:
            entry: The log entry to transform

        Returns:
            The entry, or None if it should be dropped
        """
        pass

    def __call__(self, entry: LogEntry) -> Optional[LogEntry]:
        """Allow stages to be callable."""
        return self.transform(entry)


class BaseFormatter(BaseFormat):
    """
    Abstract base class for rendering stages.

    Formatters convert LogEntry objects into the final output string,
    stored on ``entry.rendered``.
    """

    @abstractmethod
    def format(self, entry: LogEntry) -> str:
        """
        Format a log entry into a string.

        Args:
            entry: The log entry to format

        Returns:
            Formatted string representation of the log entry
        """
        pass

    def transform(self, entry: LogEntry) -> Optional[LogEntry]:
        """Render the entry and keep it."""
        entry.rendered = self.format(entry)
        return entry


class Pipeline(BaseFormat):
    """
    Ordered chain of stages.

    Stages run in order; the first stage returning None stops the chain.

    Example:
        pipeline = Pipeline([
            NamespaceFilter(["db*"]),
            ColorizeNamespaceFormat(),
            CliNamespaceFormatter(),
        ])
    """

    def __init__(self, stages: Iterable[Any] = ()):
        self._stages: List[Any] = list(stages)
        for stage in self._stages:
            if not hasattr(stage, "transform"):
                raise TypeError(f"pipeline stage {stage!r} has no transform()")

    @property
    def stages(self) -> List[Any]:
        """Copy of the stage list."""
        return list(self._stages)

    def transform(self, entry: LogEntry) -> Optional[LogEntry]:
        """Run every stage until one drops the entry."""
        for stage in self._stages:
            entry = stage.transform(entry)
            if entry is None:
                return None
        return entry

    def __len__(self) -> int:
        return len(self._stages)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._stages)

    def __repr__(self) -> str:
        """String representation."""
        return f"Pipeline({self._stages!r})"
