"""
Namespace logger factory

Turns a LoggingConfig into transports, once, and hands out logger handles
that share them.
"""

from __future__ import annotations

import atexit
import logging
import threading
from typing import Any, Iterable, List, Mapping, Optional, Union

from ns_logger.core.errors import ConfigError
from ns_logger.core.log_level import LogLevel
from ns_logger.core.logger import Logger, NamespaceLogger, parse_namespace
from ns_logger.core.logger_config import LoggingConfig, TransportConfig, load_config
from ns_logger.core import registry
from ns_logger.core.registry import Registry, side_load
from ns_logger.filters.namespace_filter import NamespaceFilter
from ns_logger.formatters.base_formatter import Pipeline

logger = logging.getLogger(__name__)


def build_pipeline(
    config: TransportConfig,
    format_registry: Optional[Registry] = None,
) -> Pipeline:
    """
    Build a transport's pipeline: namespace filter, then its formats.

    Raises:
        ConfigError: If a format is unknown or its options are invalid
    """
    formats = format_registry if format_registry is not None else registry.format_registry

    stages: List[Any] = [NamespaceFilter(config.ns)]
    for descriptor in config.formats:
        if descriptor.name not in formats:
            raise ConfigError(
                f"Impossible to find format {descriptor.name} for {config.transport} transport"
            )
        factory = formats.resolve(descriptor.name)
        try:
            stages.append(factory(**descriptor.options))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid options for format {descriptor.name}: {e}") from e

    return Pipeline(stages)


def build_transport(
    config: TransportConfig,
    transport_registry: Optional[Registry] = None,
    format_registry: Optional[Registry] = None,
) -> Any:
    """
    Build one transport from its configuration.

    The ``require`` module is imported first so it can register the
    formats and transport kind used below.

    Raises:
        ConfigError: On side-load failure, unknown format or kind, or
                     options the transport rejects
    """
    if config.require:
        side_load(config.require)

    pipeline = build_pipeline(config, format_registry)

    transports = transport_registry if transport_registry is not None else registry.transport_registry
    transport_cls = transports.resolve(config.transport)

    options = config.transport_options
    options["format"] = pipeline
    try:
        transport = transport_cls(**options)
    except ConfigError:
        raise
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid options for {config.transport} transport: {e}") from e

    logger.debug("Built %s transport for namespaces %s", config.transport, config.ns)
    return transport


class LoggerFactory:
    """
    Owner of the shared transports.

    Transports are built once, when the factory is created, and never
    change afterwards. Every handle created by the factory shares them.

    Example:
        factory = LoggerFactory.from_config({
            "logger": {
                "transports": [
                    {"transport": "Console", "ns": ["db*"],
                     "options": {"format": ["cli_ns"]}},
                ]
            }
        })
        db_logger = factory.create_logger("db")
        db_logger.info("connected")     # info | db | connected
    """

    def __init__(self, transports: Iterable[Any] = (), level: Union[LogLevel, str] = LogLevel.INFO):
        self._transports = tuple(transports)
        self._level = LogLevel.coerce(level)
        self._closed = False
        self.root = Logger(self._transports, self._level)

    @classmethod
    def from_config(
        cls,
        config: Union[LoggingConfig, Mapping[str, Any], None] = None,
        transport_registry: Optional[Registry] = None,
        format_registry: Optional[Registry] = None,
    ) -> "LoggerFactory":
        """
        Build every configured transport and return the factory.

        If any transport fails, the ones already built are closed and
        the error propagates; no factory exists afterwards.

        Args:
            config: LoggingConfig or mapping (default: no transports)
            transport_registry: Registry of transport kinds (default: process-wide)
            format_registry: Registry of formats (default: process-wide)

        Raises:
            ConfigError: If the configuration cannot be built
        """
        if not isinstance(config, LoggingConfig):
            config = LoggingConfig.from_dict(config)

        built: List[Any] = []
        try:
            for transport_config in config.transports:
                built.append(build_transport(transport_config, transport_registry, format_registry))
        except Exception:
            for transport in built:
                transport.close()
            raise

        logger.info("Logging configured with %d transport(s)", len(built))
        return cls(built, level=config.level)

    @property
    def transports(self) -> tuple:
        """The shared transports, in configuration order."""
        return self._transports

    @property
    def level(self) -> LogLevel:
        """Minimum level applied by every handle."""
        return self._level

    def create_logger(self, namespace: Union[str, Mapping[str, Any]], message: bool = False) -> NamespaceLogger:
        """
        Create a handle bound to namespace.

        Args:
            namespace: Non-empty namespace string, or {"ns": ..., "message": ...}
            message: Prefix messages with "[namespace] "

        Raises:
            ConfigError: If namespace is missing or empty
        """
        return NamespaceLogger(namespace, self._transports, level=self._level, message=message)

    def flush(self) -> None:
        """Flush every transport."""
        for transport in self._transports:
            transport.flush()

    def close(self) -> None:
        """Flush and close every transport. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        for transport in self._transports:
            transport.flush()
            transport.close()
        logger.debug("Closed %d transport(s)", len(self._transports))

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "LoggerFactory":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        """String representation."""
        return f"LoggerFactory(level={self._level}, transports={len(self._transports)})"


# Process-wide default factory for create_namespace_logger()
_default_factory: Optional[LoggerFactory] = None
_default_lock = threading.Lock()


def _install(factory: LoggerFactory) -> LoggerFactory:
    """Install factory as default (caller must hold lock)."""
    global _default_factory
    _default_factory = factory
    atexit.register(factory.close)
    return factory


def configure(config: Union[LoggingConfig, Mapping[str, Any], None] = None) -> LoggerFactory:
    """
    Build the process-wide default factory.

    Args:
        config: Configuration (default: loaded with load_config())

    Raises:
        ConfigError: If logging is already configured or the
                     configuration cannot be built
    """
    with _default_lock:
        if _default_factory is not None:
            raise ConfigError("Logging is already configured")
        if config is None:
            config = load_config()
        return _install(LoggerFactory.from_config(config))


def get_factory() -> LoggerFactory:
    """Default factory, configured from disk on first use."""
    with _default_lock:
        if _default_factory is None:
            return _install(LoggerFactory.from_config(load_config()))
        return _default_factory


def create_namespace_logger(namespace: Union[str, Mapping[str, Any]], message: bool = False) -> NamespaceLogger:
    """
    Create a namespace logger on the default factory.

    Args:
        namespace: Non-empty namespace string, or {"ns": ..., "message": ...}
        message: Prefix messages with "[namespace] "

    Raises:
        ConfigError: If namespace is missing, or the default configuration
                     cannot be built
    """
    namespace, message = parse_namespace(namespace, message)
    return get_factory().create_logger(namespace, message=message)


def reset() -> None:
    """Close and discard the default factory."""
    global _default_factory
    with _default_lock:
        if _default_factory is not None:
            atexit.unregister(_default_factory.close)
            _default_factory.close()
            _default_factory = None
