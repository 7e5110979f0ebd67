"""
Log entry data structure
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any

from ns_logger.core.log_level import LogLevel


@dataclass
class LogEntry:
    """
    Log entry data structure.

    Every transport works on its own copy (see ``copy``) because format
    stages mutate the entry in place.
    """

    level: LogLevel
    message: str
    ns: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)
    fields: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)
    logger_name: str = ""
    rendered: Optional[str] = None

    def __post_init__(self):
        """Validate log entry after initialization."""
        if not isinstance(self.level, LogLevel):
            raise TypeError("level must be LogLevel enum")
        if not isinstance(self.message, str):
            self.message = str(self.message)
        if self.meta is None:
            self.meta = {}

    def copy(self) -> "LogEntry":
        """Return an independent copy safe for in-place formatting."""
        return LogEntry(
            level=self.level,
            message=self.message,
            ns=self.ns,
            meta=dict(self.meta),
            fields=dict(self.fields),
            timestamp=self.timestamp,
            logger_name=self.logger_name,
            rendered=self.rendered,
        )

    @property
    def level_label(self) -> str:
        """Level text for rendering; a colorize stage may have replaced it."""
        return self.fields.get("level") or self.level.label

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert log entry to dictionary.

        Meta and formatter fields are merged at the top level, the
        core keys always win.

        Returns:
            Dictionary representation
        """
        data: Dict[str, Any] = {}
        data.update(self.meta)
        data.update(self.fields)
        data["level"] = self.level.label
        data["message"] = self.message
        if self.ns is not None:
            data["ns"] = self.ns
        return data

    def __str__(self) -> str:
        """String representation."""
        return (
            f"[{self.timestamp.strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]}] "
            f"[{self.level.name:8}] "
            f"[{self.ns or 'default'}] "
            f"{self.message}"
        )
