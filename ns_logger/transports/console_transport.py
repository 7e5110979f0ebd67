"""Console transport"""

import sys
from typing import Iterable, Optional, Union

from ns_logger.core.log_entry import LogEntry
from ns_logger.core.log_level import LogLevel
from ns_logger.transports.base_transport import Transport


class ConsoleTransport(Transport):
    """Write logs to the console."""

    def __init__(
        self,
        stream=None,
        stderr_levels: Optional[Iterable[Union[LogLevel, str]]] = None,
        **kwargs
    ):
        """
        Initialize console transport.

        Args:
            stream: Output stream for every entry (overrides stderr_levels)
            stderr_levels: Levels written to sys.stderr instead of sys.stdout
            **kwargs: format and level, see Transport
        """
        super().__init__(**kwargs)
        self.stream = stream
        self.stderr_levels = frozenset(LogLevel.coerce(level) for level in stderr_levels or ())

    def _target(self, entry: LogEntry):
        if self.stream is not None:
            return self.stream
        # Resolved per call so redirected sys streams are honored
        if entry.level in self.stderr_levels:
            return sys.stderr
        return sys.stdout

    def write_line(self, line: str, entry: LogEntry) -> None:
        """Write log line to console."""
        target = self._target(entry)
        target.write(line + "\n")
        target.flush()

    def flush(self):
        """Flush stream."""
        if self.stream is not None:
            self.stream.flush()
