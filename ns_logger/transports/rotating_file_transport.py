"""Rotating file transport"""

from pathlib import Path

from ns_logger.core.log_entry import LogEntry
from ns_logger.transports.base_transport import Transport


class RotatingFileTransport(Transport):
    """Write logs with size-based rotation."""

    def __init__(
        self,
        filename: str,
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
        encoding: str = "utf-8",
        **kwargs
    ):
        """
        Initialize rotating file transport.

        Args:
            filename: Path to log file
            max_bytes: Maximum file size before rotation
            backup_count: Number of backup files to keep
            encoding: File encoding (default: 'utf-8')
            **kwargs: format and level, see Transport
        """
        super().__init__(**kwargs)
        if max_bytes <= 0:
            raise ValueError("max_bytes must be positive")
        if backup_count < 1:
            raise ValueError("backup_count must be at least 1")
        self.filepath = Path(filename)
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.encoding = encoding
        self._file = None
        self._open()

    def _open(self):
        """Open log file."""
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.filepath, "a", encoding=self.encoding)

    def _backup_path(self, index: int) -> Path:
        return self.filepath.with_name(f"{self.filepath.name}.{index}")

    def _should_rotate(self) -> bool:
        """Check if file should be rotated."""
        if not self._file:
            return False
        return self._file.tell() >= self.max_bytes

    def _do_rotate(self):
        """Perform file rotation."""
        if self._file:
            self._file.close()

        # Rotate existing files
        for i in range(self.backup_count - 1, 0, -1):
            src = self._backup_path(i)
            dst = self._backup_path(i + 1)
            if src.exists():
                if dst.exists():
                    dst.unlink()
                src.rename(dst)

        # Move current to .1
        if self.filepath.exists():
            first = self._backup_path(1)
            if first.exists():
                first.unlink()
            self.filepath.rename(first)

        self._open()

    def write_line(self, line: str, entry: LogEntry) -> None:
        """Write log line with rotation."""
        if self._should_rotate():
            self._do_rotate()
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
