"""
Transport and format registries

Configuration refers to transports and formats by name. Both registries
start with the built-in kinds; plugins add theirs with
``register_transport`` / ``register_format`` before the factory is built,
usually from a module named in a transport's ``require`` entry.
"""

import importlib
import logging
import threading
from types import ModuleType
from typing import Any, Callable, Dict, List, Mapping, Optional

from ns_logger.core.errors import ConfigError
from ns_logger.filters.namespace_filter import NamespaceFilter
from ns_logger.formatters.json_formatter import JSONFormatter
from ns_logger.formatters.namespace_formatter import CliNamespaceFormatter, ColorizeNamespaceFormat
from ns_logger.formatters.text_formatter import TextFormatter
from ns_logger.formatters.timestamp_formatter import ColorizeFormat, TimestampFormat
from ns_logger.transports.console_transport import ConsoleTransport
from ns_logger.transports.file_transport import FileTransport
from ns_logger.transports.network_transport import TCPTransport, UDPTransport
from ns_logger.transports.rotating_file_transport import RotatingFileTransport

logger = logging.getLogger(__name__)


class Registry:
    """
    Name to factory mapping.

    Thread Safety:
        All methods are thread-safe for concurrent access.
    """

    def __init__(self, kind: str, entries: Optional[Mapping[str, Callable[..., Any]]] = None):
        """
        Initialize registry.

        Args:
            kind: What the registry holds, used in error messages
            entries: Initial name to factory mapping
        """
        self.kind = kind
        self._entries: Dict[str, Callable[..., Any]] = dict(entries or {})
        self._lock = threading.RLock()

    def register(self, name: str, factory: Callable[..., Any], replace: bool = False) -> None:
        """
        Register a factory under a name.

        Args:
            name: Name used in configuration
            factory: Callable building the object from keyword options
            replace: Allow overriding an existing entry

        Raises:
            ConfigError: If name is already registered and replace is False
        """
        if not isinstance(name, str) or not name:
            raise ConfigError(f"{self.kind} name must be a non-empty string")
        if not callable(factory):
            raise ConfigError(f"{self.kind} factory for {name} must be callable")

        with self._lock:
            if name in self._entries and not replace:
                raise ConfigError(f"{self.kind} '{name}' is already registered")
            self._entries[name] = factory

    def unregister(self, name: str) -> None:
        """Remove a factory; does nothing if the name is unknown."""
        with self._lock:
            self._entries.pop(name, None)

    def resolve(self, name: str) -> Callable[..., Any]:
        """
        Look up a factory by name.

        Raises:
            ConfigError: If no factory is registered under name
        """
        with self._lock:
            try:
                return self._entries[name]
            except KeyError:
                raise ConfigError(f"Unknown {self.kind} '{name}'") from None

    def names(self) -> List[str]:
        """Get all registered names."""
        with self._lock:
            return list(self._entries)

    def copy(self) -> "Registry":
        """Independent registry with the same entries."""
        with self._lock:
            return Registry(self.kind, self._entries)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._entries

    def __repr__(self) -> str:
        """String representation."""
        return f"Registry(kind={self.kind!r}, names={self.names()})"


BUILTIN_TRANSPORTS: Dict[str, Callable[..., Any]] = {
    "Console": ConsoleTransport,
    "File": FileTransport,
    "RotatingFile": RotatingFileTransport,
    "Tcp": TCPTransport,
    "Udp": UDPTransport,
}

BUILTIN_FORMATS: Dict[str, Callable[..., Any]] = {
    "filter_ns": NamespaceFilter,
    "colorize_ns": ColorizeNamespaceFormat,
    "cli_ns": CliNamespaceFormatter,
    "text": TextFormatter,
    "json": JSONFormatter,
    "timestamp": TimestampFormat,
    "colorize": ColorizeFormat,
}

transport_registry = Registry("transport", BUILTIN_TRANSPORTS)
format_registry = Registry("format", BUILTIN_FORMATS)


def register_transport(name: str, factory: Callable[..., Any], replace: bool = False) -> None:
    """Register a transport kind in the process-wide registry."""
    transport_registry.register(name, factory, replace=replace)


def register_format(name: str, factory: Callable[..., Any], replace: bool = False) -> None:
    """Register a format in the process-wide registry."""
    format_registry.register(name, factory, replace=replace)


def side_load(module_name: str) -> ModuleType:
    """
    Import a module named in a transport's ``require`` entry.

    Raises:
        ConfigError: If importing the module fails for any reason
    """
    try:
        module = importlib.import_module(module_name)
    except ConfigError:
        raise
    except Exception as e:
        raise ConfigError(f"Impossible to load module {module_name}: {e}") from e
    logger.debug("Side-loaded module %s", module_name)
    return module
