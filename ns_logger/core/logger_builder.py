"""Logger factory builder pattern"""

from typing import Any, Iterable, List, Optional, Union

from ns_logger.core.log_level import LogLevel
from ns_logger.core.logger_config import LoggingConfig, TransportConfig
from ns_logger.core.logger_factory import LoggerFactory
from ns_logger.core.registry import Registry


class LoggerBuilder:
    """Builder pattern for logger factory construction."""

    def __init__(self):
        self._level = LogLevel.INFO
        self._transports: List[TransportConfig] = []
        self._transport_registry: Optional[Registry] = None
        self._format_registry: Optional[Registry] = None

    def with_level(self, level: Union[LogLevel, str]) -> "LoggerBuilder":
        """Set minimum log level."""
        self._level = LogLevel.coerce(level)
        return self

    def with_transport(
        self,
        transport: str,
        ns: Optional[Iterable[str]] = None,
        format: Optional[Iterable[Any]] = None,
        require: Optional[str] = None,
        **options
    ) -> "LoggerBuilder":
        """
        Add a transport.

        Args:
            transport: Registered transport kind
            ns: Namespace glob patterns (default: all)
            format: Format descriptors (names or {"name", "options"} mappings)
            require: Module to import before building the transport
            **options: Transport options

        Returns:
            Self for method chaining

        Example:
            factory = (LoggerBuilder()
                .with_transport("Console", ns=["db*"], format=["cli_ns"])
                .with_transport("Tcp", host="logs.internal", port=5140,
                                format=["json"])
                .build())
        """
        if format is not None:
            options["format"] = list(format)
        self._transports.append(TransportConfig(
            transport=transport,
            options=options,
            ns=list(ns) if ns is not None else None,
            require=require,
        ))
        return self

    def with_console(
        self,
        ns: Optional[Iterable[str]] = None,
        colored: bool = True,
        **options
    ) -> "LoggerBuilder":
        """Add a console transport rendering ``level | ns | message``."""
        format = ["colorize_ns", "cli_ns"] if colored else ["cli_ns"]
        return self.with_transport("Console", ns=ns, format=format, **options)

    def with_file(
        self,
        filename: str,
        ns: Optional[Iterable[str]] = None,
        rotating: bool = False,
        **options
    ) -> "LoggerBuilder":
        """Add a file transport writing JSON lines."""
        options.setdefault("format", ["timestamp", "json"])
        kind = "RotatingFile" if rotating else "File"
        return self.with_transport(kind, ns=ns, filename=filename, **options)

    def with_registries(
        self,
        transport_registry: Optional[Registry] = None,
        format_registry: Optional[Registry] = None
    ) -> "LoggerBuilder":
        """Resolve kinds and formats against these registries instead of the process-wide ones."""
        self._transport_registry = transport_registry
        self._format_registry = format_registry
        return self

    def build_config(self) -> LoggingConfig:
        """Return the configuration collected so far."""
        return LoggingConfig(transports=list(self._transports), level=self._level)

    def build(self) -> LoggerFactory:
        """Build and return configured factory."""
        return LoggerFactory.from_config(
            self.build_config(),
            transport_registry=self._transport_registry,
            format_registry=self._format_registry,
        )
