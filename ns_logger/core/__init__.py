"""
Core module for ns_logger

This module contains the fundamental classes:
- LogLevel, LogEntry: record model
- LoggingConfig, TransportConfig, FormatDescriptor: configuration
- Logger, NamespaceLogger: logger handles
- LoggerFactory, LoggerBuilder: transport construction
"""

from ns_logger.core.errors import ConfigError
from ns_logger.core.log_level import LogLevel
from ns_logger.core.log_entry import LogEntry
from ns_logger.core.logger_config import (
    FormatDescriptor,
    LoggingConfig,
    TransportConfig,
    load_config,
)
from ns_logger.core.logger import Logger, NamespaceLogger
from ns_logger.core.logger_factory import (
    LoggerFactory,
    configure,
    create_namespace_logger,
    get_factory,
    reset,
)
from ns_logger.core.logger_builder import LoggerBuilder

__all__ = [
    "ConfigError",
    "LogLevel",
    "LogEntry",
    "FormatDescriptor",
    "LoggingConfig",
    "TransportConfig",
    "load_config",
    "Logger",
    "NamespaceLogger",
    "LoggerFactory",
    "LoggerBuilder",
    "configure",
    "create_namespace_logger",
    "get_factory",
    "reset",
]
