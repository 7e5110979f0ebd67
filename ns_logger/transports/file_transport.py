"""File transport"""

from pathlib import Path

from ns_logger.core.log_entry import LogEntry
from ns_logger.transports.base_transport import Transport


class FileTransport(Transport):
    """Write logs to file."""

    def __init__(
        self,
        filename: str,
        mode: str = "a",
        encoding: str = "utf-8",
        **kwargs
    ):
        """
        Initialize file transport.

        Args:
            filename: Path to log file
            mode: File open mode (default: 'a' for append)
            encoding: File encoding (default: 'utf-8')
            **kwargs: format and level, see Transport
        """
        super().__init__(**kwargs)
        self.filepath = Path(filename)
        self.mode = mode
        self.encoding = encoding
        self._file = None
        self._open()

    def _open(self):
        """Open log file."""
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.filepath, self.mode, encoding=self.encoding)

    def write_line(self, line: str, entry: LogEntry) -> None:
        """Write log line to file."""
        if self._file:
            self._file.write(line + "\n")

    def flush(self):
        """Flush file buffer."""
        if self._file:
            self._file.flush()

    def close(self):
        """Close file."""
        if self._file:
            self._file.close()
            self._file = None
