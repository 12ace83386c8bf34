"""TCP telemetry client."""

from __future__ import annotations

import logging
import socket
import threading
from dataclasses import dataclass, field
from typing import Any

from .config import TelemetryConfig
from .errors import NetworkException
from .frame import PayloadOrSupplier, encode_frame, resolve_payload
from .sink import TelemetrySink


logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 1845


@dataclass
class TelemetryClient(TelemetrySink):
    """
    Sends labeled events to a collector over one long-lived TCP connection.

    The connection is opened in the constructor and held until close().
    Each event is written as ``<label> <json>\\n``. Failures are raised to
    the caller as NetworkException or EncodingException; there is no
    retry or reconnect, so after a NetworkException build a new client.

    Usage:
        client = TelemetryClient(host="collector", port=1845)
        client.log("request", {"path": "/", "ms": 12})
        client.log("snapshot", lambda: expensive_state())
        client.close()

    log() is safe to call from several threads; writes are serialized so
    frames never interleave. Calling log() after close() is a programmer
    error and surfaces the closed socket's error as NetworkException.
    """
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    # Connect timeout (seconds); writes always block
    connect_timeout: float | None = None

    # Internal state
    _socket: socket.socket | None = field(default=None, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _closed: bool = field(default=False, init=False, repr=False)

    def __post_init__(self):
        self._socket = self._connect()

    @classmethod
    def from_config(cls, config: TelemetryConfig) -> TelemetryClient:
        """Connect to the collector named by a TelemetryConfig."""
        return cls(
            host=config.host,
            port=config.port,
            connect_timeout=config.connect_timeout,
        )

    def _connect(self) -> socket.socket:
        try:
            sock = socket.create_connection((self.host, self.port), timeout=self.connect_timeout)
        except OSError as e:
            logger.warning(f"Could not connect to collector at {self.host}:{self.port}: {e}")
            raise NetworkException(e) from e

        try:
            sock.settimeout(None)
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1)
        except OSError as e:
            sock.close()
            logger.warning(f"Could not configure connection to {self.host}:{self.port}: {e}")
            raise NetworkException(e) from e

        logger.info(f"Connected to collector at {self.host}:{self.port}")
        return sock

    def log(self, label: Any, data: PayloadOrSupplier = dict) -> None:
        """
        Send one event to the collector.

        Args:
            label: Event label (a single token, no whitespace)
            data: JSON-encodable payload, or a zero-argument callable
                returning one. Defaults to an empty object.

        Raises:
            EncodingException: The event could not be encoded. Nothing
                was written.
            NetworkException: The write failed (peer closed or reset).
        """
        payload = resolve_payload(data)

        frame = encode_frame(label, payload)

        with self._lock:
            try:
                self._socket.sendall(frame)
            except OSError as e:
                logger.warning(f"Write to collector at {self.host}:{self.port} failed: {e}")
                raise NetworkException(e) from e

        logger.debug(f"Sent {len(frame)} bytes for {label}")

    def close(self) -> None:
        """Close the connection. Closing twice is a no-op."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._socket.close()
        logger.info(f"Closed connection to collector at {self.host}:{self.port}")

    @property
    def closed(self) -> bool:
        """Whether close() has been called."""
        return self._closed
