"""Tests for TCP and UDP transports"""

import socket
import threading
import time
from unittest.mock import MagicMock, patch

import pytest

from ns_logger import LogLevel, LoggerFactory
from ns_logger.core.log_entry import LogEntry
from ns_logger.filters import NamespaceFilter
from ns_logger.formatters import CliNamespaceFormatter, Pipeline
from ns_logger.transports.network_transport import (
    ConnectionStats,
    TCPTransport,
    UDPTransport,
)

CLOCK = "ns_logger.transports.network_transport.time.monotonic"
SLEEP = "ns_logger.transports.network_transport.time.sleep"


def make_entry(message="Test message", ns="db"):
    return LogEntry(level=LogLevel.INFO, message=message, ns=ns)


def cli_pipeline():
    return Pipeline([NamespaceFilter(), CliNamespaceFormatter()])


def unused_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def connected_tcp():
    """TCP transport wired to a mock socket."""
    transport = TCPTransport(host="localhost", port=5140, format=cli_pipeline())
    transport._socket = MagicMock()
    transport._stats.is_connected = True
    yield transport
    transport._socket = None
    transport.close()


@pytest.fixture
def refused_tcp():
    """TCP transport whose connection attempts are refused."""
    transport = TCPTransport(host="localhost", port=5140, format=cli_pipeline())
    transport._create_socket = MagicMock(side_effect=ConnectionRefusedError("refused"))
    yield transport
    transport.close()


class TestConnectionStats:
    """Test delivery counters."""

    def test_counters(self):
        stats = ConnectionStats()
        stats.record_success(100)
        stats.record_success(50)
        stats.record_failure("refused")

        assert stats.messages_sent == 2
        assert stats.bytes_sent == 150
        assert stats.messages_failed == 1
        assert stats.last_error == "refused"
        assert stats.is_connected is False


class TestTCPTransport:
    """Test TCP delivery, buffering and reconnection."""

    def test_options(self):
        transport = TCPTransport(host="localhost", port="5140")

        assert transport.port == 5140
        assert transport.timeout == 5.0
        assert transport.reconnect_attempts == 3
        assert transport.nodelay is True
        assert transport.keepalive is True

    def test_socket_type(self):
        sock = TCPTransport(host="localhost", port=5140)._create_socket()
        assert sock.type == socket.SOCK_STREAM
        sock.close()

    def test_sends_rendered_line(self):
        transport = TCPTransport(
            host="localhost",
            port=5140,
            format=Pipeline([NamespaceFilter(["db*"]), CliNamespaceFormatter()]),
        )
        mock_socket = MagicMock()
        transport._socket = mock_socket
        transport._stats.is_connected = True

        assert transport.log(make_entry("connected")) is True
        assert transport.log(make_entry("ignored", ns="web")) is False

        mock_socket.sendall.assert_called_once_with(b"info | db | connected\n")
        assert transport.get_metrics() == {"written": 1, "filtered": 1, "failed": 0}

        transport._socket = None
        transport.close()

    def test_dead_collector_does_not_block(self):
        factory = LoggerFactory.from_config({
            "logger": {
                "transports": [{
                    "transport": "Tcp",
                    "options": {"host": "127.0.0.1", "port": unused_port(), "format": ["cli_ns"]},
                }]
            }
        })
        (tcp,) = factory.transports
        db = factory.create_logger("db")

        started = time.monotonic()
        db.info("one")
        db.info("two")
        elapsed = time.monotonic() - started

        assert elapsed < 0.5
        assert tcp.get_buffer_size() == 2
        assert tcp.get_metrics()["failed"] == 2
        assert tcp.get_metrics()["written"] == 0

        tcp._buffer.clear()
        factory.close()

    def test_write_path_retries_on_backoff_schedule(self, refused_tcp):
        clock = MagicMock(return_value=100.0)

        with patch(CLOCK, clock), patch(SLEEP) as mock_sleep:
            for now in (100.0, 100.5, 101.0, 102.0, 103.0):
                clock.return_value = now
                refused_tcp.log(make_entry(f"at {now}"))

        assert refused_tcp._create_socket.call_count == 3
        mock_sleep.assert_not_called()
        assert refused_tcp.get_buffer_size() == 5

    def test_reconnect_replays_buffer_in_order(self, refused_tcp):
        clock = MagicMock(return_value=100.0)
        mock_socket = MagicMock()

        with patch(CLOCK, clock):
            refused_tcp.log(make_entry("first"))
            refused_tcp.log(make_entry("second"))

            refused_tcp._create_socket = MagicMock(return_value=mock_socket)
            clock.return_value = 101.0
            assert refused_tcp.log(make_entry("third")) is True

        assert [c.args[0] for c in mock_socket.sendall.call_args_list] == [
            b"info | db | first\n",
            b"info | db | second\n",
            b"info | db | third\n",
        ]
        assert refused_tcp.get_buffer_size() == 0
        assert refused_tcp.get_metrics() == {"written": 1, "filtered": 0, "failed": 2}

        refused_tcp._socket = None

    def test_backoff_resets_after_success(self, refused_tcp):
        clock = MagicMock(return_value=100.0)

        with patch(CLOCK, clock):
            refused_tcp.log(make_entry())
            refused_tcp._create_socket = MagicMock(return_value=MagicMock())
            clock.return_value = 101.0
            refused_tcp.log(make_entry())

        assert refused_tcp._retry_delay == refused_tcp.reconnect_delay
        refused_tcp._socket = None

    def test_backoff_is_capped(self):
        transport = TCPTransport(host="localhost", port=5140, reconnect_delay=10, max_reconnect_delay=25)
        transport._create_socket = MagicMock(side_effect=OSError("unreachable"))

        with patch(CLOCK, return_value=0.0):
            for _ in range(3):
                transport._try_connect()

        assert transport._retry_delay == 25
        transport.close()

    def test_buffer_limit(self, refused_tcp):
        refused_tcp.max_buffer_entries = 2

        for i in range(4):
            refused_tcp.log(make_entry(f"message {i}"))

        assert refused_tcp.get_buffer_size() == 2
        assert refused_tcp.get_stats().last_error == "buffer_overflow"

    def test_connect_retries_with_backoff(self, refused_tcp):
        refused_tcp.reconnect_delay = 0.01

        with patch(SLEEP) as mock_sleep:
            assert refused_tcp.connect() is False

        assert refused_tcp._create_socket.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [0.01, 0.02]
        assert refused_tcp.get_stats().reconnect_count == 2

    def test_flush_reconnects_and_sends_buffer(self):
        transport = TCPTransport(host="localhost", port=5140)
        transport._buffer.append(b"buffered\n")
        mock_socket = MagicMock()
        transport._create_socket = lambda: mock_socket

        transport.flush()

        mock_socket.sendall.assert_called_once_with(b"buffered\n")
        assert transport.get_buffer_size() == 0
        assert transport.is_connected() is True

        transport._socket = None
        transport.close()

    def test_send_failure_marks_disconnected(self, connected_tcp):
        connected_tcp._socket.sendall.side_effect = ConnectionResetError("reset")

        assert connected_tcp.log(make_entry()) is False

        assert connected_tcp.is_connected() is False
        assert connected_tcp.get_buffer_size() == 1
        assert connected_tcp.get_stats().last_error == "reset"

    def test_get_stats_returns_copy(self, connected_tcp):
        snapshot = connected_tcp.get_stats()
        snapshot.messages_sent = 100
        assert connected_tcp.get_stats().messages_sent == 0

    def test_write_after_close_is_dropped(self, connected_tcp):
        mock_socket = connected_tcp._socket
        connected_tcp.close()

        assert connected_tcp.log(make_entry()) is False
        mock_socket.sendall.assert_not_called()

    def test_concurrent_writes(self, connected_tcp):
        def write_messages():
            for i in range(50):
                connected_tcp.log(make_entry(f"Thread message {i}"))

        threads = [threading.Thread(target=write_messages) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert connected_tcp.get_stats().messages_sent == 250
        assert connected_tcp.get_metrics()["written"] == 250


class TestUDPTransport:
    """Test UDP datagrams."""

    def test_defaults(self):
        transport = UDPTransport(host="localhost", port=514)

        assert transport.truncate_oversized is True
        assert transport.max_buffer_entries == 0

    def test_connect_needs_no_peer(self):
        transport = UDPTransport(host="localhost", port=514)

        assert transport.connect() is True
        assert transport.is_connected() is True

        transport.close()

    def test_sends_datagram(self):
        transport = UDPTransport(host="127.0.0.1", port=9999, format=cli_pipeline())
        mock_socket = MagicMock()
        transport._create_socket = lambda: mock_socket

        assert transport.log(make_entry("up")) is True
        mock_socket.sendto.assert_called_once_with(b"info | db | up\n", ("127.0.0.1", 9999))

        transport._socket = None
        transport.close()

    def test_truncates_oversized_datagram(self):
        transport = UDPTransport(host="127.0.0.1", port=9999)
        mock_socket = MagicMock()
        transport._socket = mock_socket

        transport._send_data(b"x" * 70000)

        assert len(mock_socket.sendto.call_args[0][0]) == UDPTransport.MAX_UDP_PAYLOAD

        transport._socket = None
        transport.close()

    def test_failed_datagram_is_counted_not_buffered(self):
        transport = UDPTransport(host="127.0.0.1", port=9999)
        mock_socket = MagicMock()
        mock_socket.sendto.side_effect = OSError("unreachable")
        transport._socket = mock_socket
        transport._stats.is_connected = True

        assert transport.log(make_entry()) is False

        assert transport.get_buffer_size() == 0
        assert transport.get_stats().messages_failed == 1
        assert transport.get_metrics()["failed"] == 1

        transport._socket = None
        transport.close()


class TestFactoryIntegration:
    """Test building network transports from configuration."""

    def test_tcp_and_udp_from_config(self):
        factory = LoggerFactory.from_config({
            "logger": {
                "transports": [
                    {"transport": "Tcp", "options": {"host": "tcp-host", "port": 5140, "format": ["json"]}},
                    {"transport": "Udp", "ns": ["metrics:*"], "options": {"host": "udp-host", "port": 514}},
                ]
            }
        })

        tcp, udp = factory.transports
        assert isinstance(tcp, TCPTransport)
        assert tcp.host == "tcp-host"
        assert isinstance(udp, UDPTransport)
        assert udp.format.stages[0].patterns == ("metrics:*",)

        factory.close()
