"""
BSD 3-Clause License

Copyright (c) 2021, 🍀☀🌕🌥 🌊
All rights reserved.

ns_logger - Namespace-aware logging over configurable transports
"""

__version__ = "1.0.0"
__author__ = "kcenon"
__email__ = "kcenon@naver.com"

from ns_logger.core.errors import ConfigError
from ns_logger.core.log_entry import LogEntry
from ns_logger.core.log_level import LogLevel
from ns_logger.core.logger import Logger, NamespaceLogger
from ns_logger.core.logger_builder import LoggerBuilder
from ns_logger.core.logger_config import LoggingConfig, TransportConfig, FormatDescriptor, load_config
from ns_logger.core.logger_factory import (
    LoggerFactory,
    configure,
    create_namespace_logger,
    reset,
)
from ns_logger.core.registry import register_format, register_transport

# Import submodules (not all classes by default)
from ns_logger import filters
from ns_logger import formatters
from ns_logger import transports

__all__ = [
    "ConfigError",
    "LogEntry",
    "LogLevel",
    "Logger",
    "NamespaceLogger",
    "LoggerBuilder",
    "LoggingConfig",
    "TransportConfig",
    "FormatDescriptor",
    "load_config",
    "LoggerFactory",
    "configure",
    "create_namespace_logger",
    "reset",
    "register_format",
    "register_transport",
    "filters",
    "formatters",
    "transports",
]
