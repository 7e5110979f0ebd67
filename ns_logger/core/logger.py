"""
Logger handles

A Logger offers each record to every transport of its factory. A
NamespaceLogger additionally stamps records with its namespace.
"""

from __future__ import annotations
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from ns_logger.core.errors import ConfigError
from ns_logger.core.log_entry import LogEntry
from ns_logger.core.log_level import LogLevel


def parse_namespace(namespace: Any, message: bool = False) -> Tuple[str, bool]:
    """
    Validate the namespace argument of a logger handle.

    ``namespace`` is a string, or a mapping ``{"ns": ..., "message": ...}``.

    Raises:
        ConfigError: If no non-empty namespace string is provided
    """
    if isinstance(namespace, Mapping):
        message = namespace.get("message", message)
        namespace = namespace.get("ns")
    if not isinstance(namespace, str) or not namespace:
        raise ConfigError("No namespace provided")
    return namespace, bool(message)


class Logger:
    """Logger handle routing records to a shared set of transports."""

    def __init__(
        self,
        transports: Sequence[Any] = (),
        level: Union[LogLevel, str] = LogLevel.INFO,
        name: str = "",
    ):
        self._transports = tuple(transports)
        self._level = LogLevel.coerce(level)
        self._name = name
        self._metrics = {"logged": 0, "skipped": 0}

    @property
    def transports(self) -> Tuple[Any, ...]:
        """Transports records are offered to."""
        return self._transports

    @property
    def level(self) -> LogLevel:
        """Minimum level of records this handle emits."""
        return self._level

    def is_enabled_for(self, level: LogLevel) -> bool:
        """Check whether a record at level would be emitted."""
        return self._level != LogLevel.OFF and level >= self._level

    def _make_entry(self, level: LogLevel, message: str, meta: Dict[str, Any]) -> LogEntry:
        return LogEntry(level=level, message=message, meta=meta, logger_name=self._name)

    def log(
        self,
        level: Union[LogLevel, str],
        message: str,
        meta: Optional[Mapping[str, Any]] = None,
        **fields: Any
    ) -> None:
        """
        Log a message.

        Args:
            level: Record level
            message: Message text
            meta: Structured extra argument
            **fields: Merged into meta
        """
        level = LogLevel.coerce(level)
        if not self.is_enabled_for(level):
            self._metrics["skipped"] += 1
            return

        extra = dict(meta) if meta else {}
        extra.update(fields)

        entry = self._make_entry(level, message, extra)
        for transport in self._transports:
            transport.log(entry)
        self._metrics["logged"] += 1

    def trace(self, message: str, meta: Optional[Mapping[str, Any]] = None, **fields: Any) -> None:
        """Log trace message."""
        self.log(LogLevel.TRACE, message, meta, **fields)

    def debug(self, message: str, meta: Optional[Mapping[str, Any]] = None, **fields: Any) -> None:
        """Log debug message."""
        self.log(LogLevel.DEBUG, message, meta, **fields)

    def info(self, message: str, meta: Optional[Mapping[str, Any]] = None, **fields: Any) -> None:
        """Log info message."""
        self.log(LogLevel.INFO, message, meta, **fields)

    def warn(self, message: str, meta: Optional[Mapping[str, Any]] = None, **fields: Any) -> None:
        """Log warning message."""
        self.log(LogLevel.WARN, message, meta, **fields)

    warning = warn

    def error(self, message: str, meta: Optional[Mapping[str, Any]] = None, **fields: Any) -> None:
        """Log error message."""
        self.log(LogLevel.ERROR, message, meta, **fields)

    def critical(self, message: str, meta: Optional[Mapping[str, Any]] = None, **fields: Any) -> None:
        """Log critical message."""
        self.log(LogLevel.CRITICAL, message, meta, **fields)

    def flush(self) -> None:
        """Flush all transports."""
        for transport in self._transports:
            transport.flush()

    def get_metrics(self) -> dict:
        """Get logging metrics."""
        return self._metrics.copy()

    def __repr__(self) -> str:
        """String representation."""
        return f"Logger(level={self._level}, transports={len(self._transports)})"


class NamespaceLogger(Logger):
    """
    Logger handle bound to one namespace.

    Every record carries ``ns``; with ``message=True`` the message text is
    also prefixed with ``[namespace]``. Handles are cheap: any number of
    them may share the same transports.
    """

    def __init__(
        self,
        namespace: Union[str, Mapping[str, Any]],
        transports: Sequence[Any] = (),
        level: Union[LogLevel, str] = LogLevel.INFO,
        message: bool = False,
    ):
        """
        Initialize namespace logger.

        Args:
            namespace: Namespace string, or {"ns": ..., "message": ...}
            transports: Shared transports
            level: Minimum record level
            message: Prefix messages with "[namespace] "

        Raises:
            ConfigError: If namespace is missing or empty
        """
        namespace, message = parse_namespace(namespace, message)
        super().__init__(transports, level, name=namespace)
        self.namespace = namespace
        self.message_prefix = message

    def _make_entry(self, level: LogLevel, message: str, meta: Dict[str, Any]) -> LogEntry:
        if self.message_prefix:
            message = f"[{self.namespace}] {message}"
        entry = super()._make_entry(level, message, meta)
        entry.ns = self.namespace
        return entry

    def child(self, suffix: str) -> "NamespaceLogger":
        """Handle for the sub-namespace ``<namespace>:<suffix>``."""
        if not isinstance(suffix, str) or not suffix:
            raise ConfigError("No namespace provided")
        return NamespaceLogger(
            f"{self.namespace}:{suffix}",
            self._transports,
            level=self._level,
            message=self.message_prefix,
        )

    def __repr__(self) -> str:
        """String representation."""
        return f"NamespaceLogger(ns={self.namespace!r}, level={self._level})"
