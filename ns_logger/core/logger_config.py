"""
Logging configuration management

Configuration is plain data: a ``logger`` section holding an ordered list
of transports. It can be built in code, parsed from a mapping or loaded
from layered JSON/YAML files with ``load_config``.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from ns_logger.core.errors import ConfigError
from ns_logger.core.log_level import LogLevel

logger = logging.getLogger(__name__)

CONFIG_DIR_VAR = "NS_LOGGER_CONFIG_DIR"
CONFIG_ENV_VAR = "NS_LOGGER_ENV"
DEFAULT_CONFIG_DIR = "config"
DEFAULT_ENV = "development"
CONFIG_EXTENSIONS = (".json", ".yaml", ".yml")


@dataclass
class FormatDescriptor:
    """
    Reference to a registered format and the options to build it with.

    In configuration files a descriptor is either a bare name
    (``"cli_ns"``) or a mapping (``{"name": "cli_ns", "options": {...}}``).
    """

    name: str
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate descriptor after initialization."""
        if not isinstance(self.name, str) or not self.name:
            raise ConfigError(f"Format name must be a non-empty string, got {self.name!r}")
        if self.options is None:
            self.options = {}
        if not isinstance(self.options, Mapping):
            raise ConfigError(f"Options of format {self.name} must be a mapping")
        self.options = dict(self.options)

    @classmethod
    def from_value(cls, value: Union[str, Mapping[str, Any], "FormatDescriptor"]) -> "FormatDescriptor":
        """Parse a descriptor from its configuration form."""
        if isinstance(value, FormatDescriptor):
            return value
        if isinstance(value, str):
            return cls(name=value)
        if isinstance(value, Mapping):
            return cls(name=value.get("name"), options=value.get("options") or {})
        raise ConfigError(f"Invalid format descriptor: {value!r}")


@dataclass
class TransportConfig:
    """
    Configuration of one transport.

    Attributes:
        transport: Registered transport kind, e.g. "Console" or "File"
        options: Transport options; ``format`` holds the format descriptors
        ns: Namespace glob patterns the transport accepts
        require: Module imported before the transport is built
    """

    transport: str
    options: Dict[str, Any] = field(default_factory=dict)
    ns: Optional[List[str]] = None
    require: Optional[str] = None

    def __post_init__(self):
        """Validate transport configuration after initialization."""
        if not isinstance(self.transport, str) or not self.transport:
            raise ConfigError(f"Transport kind must be a non-empty string, got {self.transport!r}")

        if self.options is None:
            self.options = {}
        if not isinstance(self.options, Mapping):
            raise ConfigError(f"Options of transport {self.transport} must be a mapping")
        self.options = dict(self.options)

        if self.ns is None:
            self.ns = ["*"]
        elif isinstance(self.ns, str):
            self.ns = [self.ns]
        if not isinstance(self.ns, (list, tuple)) or not all(isinstance(p, str) for p in self.ns):
            raise ConfigError(f"ns of transport {self.transport} must be a list of glob patterns")
        self.ns = list(self.ns)

        if self.require is not None and (not isinstance(self.require, str) or not self.require):
            raise ConfigError(f"require of transport {self.transport} must be a module name")

    @property
    def formats(self) -> List[FormatDescriptor]:
        """Format descriptors declared under ``options.format``."""
        formats = self.options.get("format") or []
        if isinstance(formats, (str, Mapping, FormatDescriptor)):
            formats = [formats]
        return [FormatDescriptor.from_value(value) for value in formats]

    @property
    def transport_options(self) -> Dict[str, Any]:
        """Options passed to the transport constructor."""
        return {key: value for key, value in self.options.items() if key != "format"}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TransportConfig":
        """Create transport configuration from a mapping."""
        if not isinstance(data, Mapping):
            raise ConfigError(f"Transport entry must be a mapping, got {data!r}")
        if "transport" not in data:
            raise ConfigError(f"Transport entry without 'transport' kind: {dict(data)!r}")
        return cls(
            transport=data["transport"],
            options=data.get("options") or {},
            ns=data.get("ns"),
            require=data.get("require"),
        )


@dataclass
class LoggingConfig:
    """
    Logging configuration.

    Holds the transports in the order records are offered to them and the
    minimum level every logger handle applies before routing.
    """

    transports: List[TransportConfig] = field(default_factory=list)
    level: LogLevel = LogLevel.INFO

    def __post_init__(self):
        """Validate configuration after initialization."""
        try:
            self.level = LogLevel.coerce(self.level)
        except ValueError as e:
            raise ConfigError(str(e)) from e
        self.transports = [
            t if isinstance(t, TransportConfig) else TransportConfig.from_dict(t)
            for t in self.transports
        ]

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "LoggingConfig":
        """
        Create configuration from a mapping.

        Accepts either the full document (``{"logger": {...}}``) or the
        ``logger`` section itself.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

        section = data.get("logger", data)
        if section is None:
            return cls()
        if not isinstance(section, Mapping):
            raise ConfigError("'logger' configuration must be a mapping")

        transports = section.get("transports") or []
        if not isinstance(transports, (list, tuple)):
            raise ConfigError("'logger.transports' must be a list")

        return cls(
            transports=[TransportConfig.from_dict(t) for t in transports],
            level=section.get("level", LogLevel.INFO),
        )

    @classmethod
    def default(cls) -> "LoggingConfig":
        """Create an empty configuration (no transports)."""
        return cls()

    @classmethod
    def console_config(cls, ns: Optional[List[str]] = None, level: LogLevel = LogLevel.INFO) -> "LoggingConfig":
        """Create configuration with a single colored CLI console transport."""
        return cls(
            transports=[
                TransportConfig(
                    transport="Console",
                    options={"format": ["colorize_ns", "cli_ns"]},
                    ns=ns,
                )
            ],
            level=level,
        )

    @classmethod
    def debug_config(cls) -> "LoggingConfig":
        """Create configuration for debugging: everything to the console."""
        return cls.console_config(level=LogLevel.DEBUG)


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge two mappings recursively.

    Nested mappings merge, every other value (lists included) is replaced.
    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read one JSON or YAML configuration file.

    Raises:
        ConfigError: If the file cannot be parsed or is not a mapping
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Invalid configuration file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"Configuration file {path} must contain a mapping")
    return dict(data)


def load_config(
    config_dir: Optional[Union[str, Path]] = None,
    env: Optional[str] = None,
) -> LoggingConfig:
    """
    Load layered configuration from a directory.

    Files are merged in order ``default``, ``<env>``, ``local``, each
    looked up with the extensions ``.json``, ``.yaml`` and ``.yml``.

    Args:
        config_dir: Directory to read (default: $NS_LOGGER_CONFIG_DIR or ./config)
        env: Environment name (default: $NS_LOGGER_ENV or "development")

    Returns:
        Parsed configuration; empty when no file exists
    """
    directory = Path(config_dir or os.environ.get(CONFIG_DIR_VAR, DEFAULT_CONFIG_DIR))
    env = env or os.environ.get(CONFIG_ENV_VAR, DEFAULT_ENV)

    merged: Dict[str, Any] = {}
    for stem in ("default", env, "local"):
        for extension in CONFIG_EXTENSIONS:
            path = directory / f"{stem}{extension}"
            if path.is_file():
                logger.debug("Loading logging configuration from %s", path)
                merged = deep_merge(merged, read_config_file(path))

    if not merged:
        logger.debug("No logging configuration found in %s", directory)

    return LoggingConfig.from_dict(merged)
