"""
Network transports for centralized logging

Send rendered log lines to remote collectors via TCP or UDP, one line
per record.
"""

from __future__ import annotations

import dataclasses
import socket
import threading
import time
from abc import abstractmethod
from typing import List, Optional

from ns_logger.core.log_entry import LogEntry
from ns_logger.transports.base_transport import Transport


@dataclasses.dataclass
class ConnectionStats:
    """Delivery counters of a network transport."""

    messages_sent: int = 0
    messages_failed: int = 0
    bytes_sent: int = 0
    reconnect_count: int = 0
    last_error: Optional[str] = None
    is_connected: bool = False

    def record_success(self, bytes_count: int) -> None:
        self.messages_sent += 1
        self.bytes_sent += bytes_count

    def record_failure(self, error: str) -> None:
        self.messages_failed += 1
        self.last_error = error


class NetworkTransport(Transport):
    """
    Base class for network transports.

    Logging never sleeps. While the collector is unreachable, lines are
    buffered up to ``max_buffer_entries`` and at most one connection attempt
    is made per backoff interval; the buffer is replayed, in order, once a
    connection succeeds. ``connect()`` and ``flush()`` block and run the
    full retry loop.
    """

    def __init__(
        self,
        host: str,
        port: int,
        timeout: float = 5.0,
        reconnect_attempts: int = 3,
        reconnect_delay: float = 1.0,
        reconnect_backoff: float = 2.0,
        max_reconnect_delay: float = 60.0,
        max_buffer_entries: int = 1000,
        **kwargs
    ):
        """
        Initialize network transport.

        Args:
            host: Remote host address
            port: Remote port number
            timeout: Socket timeout in seconds
            reconnect_attempts: Attempts made by connect() and flush()
            reconnect_delay: Initial delay between attempts
            reconnect_backoff: Multiplier applied to the delay after each failure
            max_reconnect_delay: Upper bound for the delay
            max_buffer_entries: Maximum buffered lines during disconnect
            **kwargs: format and level, see Transport
        """
        super().__init__(**kwargs)
        self.host = host
        self.port = int(port)
        self.timeout = timeout
        self.reconnect_attempts = reconnect_attempts
        self.reconnect_delay = reconnect_delay
        self.reconnect_backoff = reconnect_backoff
        self.max_reconnect_delay = max_reconnect_delay
        self.max_buffer_entries = max_buffer_entries

        self._socket: Optional[socket.socket] = None
        self._lock = threading.Lock()
        self._stats = ConnectionStats()
        self._buffer: List[bytes] = []
        self._closed = False
        self._retry_delay = reconnect_delay
        self._next_retry = 0.0

    @abstractmethod
    def _create_socket(self) -> socket.socket:
        pass

    @abstractmethod
    def _send_data(self, data: bytes) -> bool:
        """Send data, return False on failure."""
        pass

    def _do_connect(self) -> None:
        """Connectionless protocols have nothing to do here."""

    def _try_connect(self) -> bool:
        """
        Make one connection attempt (caller must hold lock).

        A failure schedules the next write-path attempt after the current
        backoff delay.
        """
        if self._socket is not None:
            return True

        try:
            self._socket = self._create_socket()
            self._socket.settimeout(self.timeout)
            self._do_connect()
        except OSError as e:
            self._stats.record_failure(str(e))
            self._close_socket()
            self._next_retry = time.monotonic() + self._retry_delay
            self._retry_delay = min(self._retry_delay * self.reconnect_backoff, self.max_reconnect_delay)
            return False

        self._stats.is_connected = True
        self._retry_delay = self.reconnect_delay
        self._next_retry = 0.0
        self._flush_buffer()
        return True

    def _connect_internal(self) -> bool:
        """Retry loop with exponential backoff (caller must hold lock)."""
        delay = self.reconnect_delay
        for attempt in range(self.reconnect_attempts):
            if self._try_connect():
                return True
            if attempt < self.reconnect_attempts - 1:
                self._stats.reconnect_count += 1
                time.sleep(delay)
                delay = min(delay * self.reconnect_backoff, self.max_reconnect_delay)
        return False

    def connect(self) -> bool:
        """
        Establish connection, retrying with backoff.

        Returns:
            True if connection was established
        """
        with self._lock:
            return self._connect_internal()

    def _flush_buffer(self) -> None:
        while self._buffer:
            data = self._buffer[0]
            if not self._send_data(data):
                break
            self._buffer.pop(0)
            self._stats.record_success(len(data))

    def write_line(self, line: str, entry: LogEntry) -> bool:
        """
        Send a rendered line.

        Returns:
            True if the line was sent, False if it was buffered or dropped
        """
        if self._closed:
            return False

        data = (line + "\n").encode("utf-8")

        with self._lock:
            if not self._stats.is_connected and time.monotonic() >= self._next_retry:
                self._try_connect()

            if self._stats.is_connected and self._send_data(data):
                self._stats.record_success(len(data))
                return True

            self._add_to_buffer(data)
            return False

    def _add_to_buffer(self, data: bytes) -> None:
        """Add data to internal buffer (caller must hold lock)."""
        if len(self._buffer) < self.max_buffer_entries:
            self._buffer.append(data)
        else:
            self._stats.record_failure("buffer_overflow")

    def _handle_send_error(self, error: Exception) -> None:
        self._stats.record_failure(str(error))
        self._stats.is_connected = False
        self._close_socket()

    def _close_socket(self) -> None:
        if self._socket:
            try:
                self._socket.close()
            except OSError:
                pass
            self._socket = None

    def flush(self) -> None:
        """Reconnect if needed and send buffered lines."""
        if self._closed:
            return

        with self._lock:
            if self._buffer:
                if not self._stats.is_connected:
                    self._connect_internal()
                if self._stats.is_connected:
                    self._flush_buffer()

    def close(self) -> None:
        """Send what can be sent without reconnecting, then close."""
        if self._closed:
            return

        with self._lock:
            self._closed = True
            if self._stats.is_connected:
                self._flush_buffer()
            self._close_socket()
            self._stats.is_connected = False

    def get_stats(self) -> ConnectionStats:
        """Snapshot of the delivery counters."""
        with self._lock:
            return dataclasses.replace(self._stats)

    def get_buffer_size(self) -> int:
        with self._lock:
            return len(self._buffer)

    def is_connected(self) -> bool:
        with self._lock:
            return self._stats.is_connected


class TCPTransport(NetworkTransport):
    """
    Newline-delimited lines over a TCP connection.

    Example:
        {"transport": "Tcp", "options": {"host": "logs.internal", "port": 5140}}
    """

    def __init__(self, host: str, port: int, nodelay: bool = True, keepalive: bool = True, **kwargs):
        super().__init__(host, port, **kwargs)
        self.nodelay = nodelay
        self.keepalive = keepalive

    def _create_socket(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        if self.nodelay:
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        if self.keepalive:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)
        return sock

    def _do_connect(self) -> None:
        self._socket.connect((self.host, self.port))

    def _send_data(self, data: bytes) -> bool:
        if not self._socket:
            return False
        try:
            self._socket.sendall(data)
            return True
        except OSError as e:
            self._handle_send_error(e)
            return False


class UDPTransport(NetworkTransport):
    """
    One datagram per line, fire-and-forget.

    Failed datagrams are counted, never buffered.
    """

    MAX_UDP_PAYLOAD = 65507

    def __init__(self, host: str, port: int, truncate_oversized: bool = True, **kwargs):
        kwargs.setdefault("reconnect_attempts", 1)
        kwargs.setdefault("reconnect_delay", 0)
        kwargs.setdefault("max_buffer_entries", 0)
        super().__init__(host, port, **kwargs)
        self.truncate_oversized = truncate_oversized
        self._target = (host, self.port)

    def _create_socket(self) -> socket.socket:
        return socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def _send_data(self, data: bytes) -> bool:
        if not self._socket:
            return False

        if self.truncate_oversized and len(data) > self.MAX_UDP_PAYLOAD:
            data = data[: self.MAX_UDP_PAYLOAD]

        try:
            self._socket.sendto(data, self._target)
            return True
        except OSError as e:
            self._stats.record_failure(str(e))
            return False

    def _add_to_buffer(self, data: bytes) -> None:
        """Datagrams are never buffered; the failure is already counted."""
