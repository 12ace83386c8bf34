"""Shared test fixtures for telemetry client tests.

The collector fixture is a small threaded TCP server that records every
newline-delimited frame it receives, standing in for the real collector.
"""

import socket
import threading
import time

import pytest

import telemetry_client


class Collector:
    """In-process collector that records received lines."""

    def __init__(self):
        self._server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._server.bind(("127.0.0.1", 0))
        self._server.listen(8)
        self.host, self.port = self._server.getsockname()

        self.lines: list[bytes] = []
        self.connections: list[socket.socket] = []
        self._lock = threading.Lock()
        self._running = True
        self._thread = threading.Thread(target=self._accept_loop, daemon=True)
        self._thread.start()

    def _accept_loop(self):
        while self._running:
            try:
                conn, _ = self._server.accept()
            except OSError:
                break
            with self._lock:
                self.connections.append(conn)
            threading.Thread(target=self._read_loop, args=(conn,), daemon=True).start()

    def _read_loop(self, conn: socket.socket):
        buffer = b""
        while True:
            try:
                chunk = conn.recv(65536)
            except OSError:
                break
            if not chunk:
                break
            buffer += chunk
            while b"\n" in buffer:
                line, buffer = buffer.split(b"\n", 1)
                with self._lock:
                    self.lines.append(line + b"\n")

    def wait_for_lines(self, count: int, timeout: float = 5.0) -> list[bytes]:
        """Wait until at least ``count`` lines have arrived."""
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            with self._lock:
                if len(self.lines) >= count:
                    return list(self.lines)
            time.sleep(0.01)
        with self._lock:
            return list(self.lines)

    def wait_for_connections(self, count: int, timeout: float = 5.0) -> None:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            with self._lock:
                if len(self.connections) >= count:
                    return
            time.sleep(0.01)

    def drop_connections(self) -> None:
        """Hang up on every connected client."""
        self.wait_for_connections(1)
        with self._lock:
            connections = list(self.connections)
        for conn in connections:
            try:
                conn.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            conn.close()

    def stop(self) -> None:
        self._running = False
        self._server.close()
        with self._lock:
            connections = list(self.connections)
        for conn in connections:
            conn.close()


# =============================================================================
# Collector Fixtures
# =============================================================================

@pytest.fixture
def collector():
    """Running collector on an ephemeral local port."""
    server = Collector()
    yield server
    server.stop()


@pytest.fixture
def unused_port() -> int:
    """A local port with nothing listening on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def client(collector):
    """Client connected to the test collector."""
    c = telemetry_client.TelemetryClient(host=collector.host, port=collector.port)
    yield c
    c.close()


@pytest.fixture(autouse=True)
def reset_default_sink(monkeypatch):
    """Isolate tests from TELEMETRY_* env vars and the default sink."""
    for name in (
        "TELEMETRY_HOST",
        "TELEMETRY_PORT",
        "TELEMETRY_ENABLED",
        "TELEMETRY_CONNECT_TIMEOUT",
        "TELEMETRY_FALLBACK",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    telemetry_client.shutdown()
