"""Transports module - Log output sinks"""

from ns_logger.transports.base_transport import Transport
from ns_logger.transports.console_transport import ConsoleTransport
from ns_logger.transports.file_transport import FileTransport
from ns_logger.transports.network_transport import (
    ConnectionStats,
    NetworkTransport,
    TCPTransport,
    UDPTransport,
)
from ns_logger.transports.rotating_file_transport import RotatingFileTransport

__all__ = [
    "Transport",
    "ConsoleTransport",
    "FileTransport",
    "RotatingFileTransport",
    "ConnectionStats",
    "NetworkTransport",
    "TCPTransport",
    "UDPTransport",
]
