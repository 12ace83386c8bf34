"""
Telemetry Client Library

Sends labeled JSON events to a telemetry collector over TCP.

Usage:
    # Object-oriented API (recommended)
    from telemetry_client import TelemetryClient

    client = TelemetryClient(host="localhost", port=1845)
    client.log("login", {"user": "alice"})

    # Build the payload only when it will be used
    client.log("state", lambda: build_expensive_state())
    client.close()

    # Pick the real client or the no-op sink from configuration
    from telemetry_client import TelemetryConfig, create_sink

    sink = create_sink(TelemetryConfig(enabled=False))
    sink.log("login", {"user": "alice"})  # does nothing

    # Functional API (also available, configured from TELEMETRY_* env vars)
    import telemetry_client

    telemetry_client.log("login", {"user": "alice"})
    telemetry_client.shutdown()
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from .client import TelemetryClient
from .config import TelemetryConfig
from .errors import EncodingException, ErrorKind, NetworkException, TelemetryError
from .frame import PayloadOrSupplier, decode_frame, encode_frame
from .sink import NullTelemetry, TelemetrySink

__version__ = "0.1.0"

__all__ = [
    # Sinks
    "TelemetrySink",
    "TelemetryClient",
    "NullTelemetry",
    "TelemetryConfig",
    "create_sink",
    # Convenience functions
    "configure",
    "log",
    "shutdown",
    # Wire format
    "encode_frame",
    "decode_frame",
    # Exceptions
    "TelemetryError",
    "ErrorKind",
    "NetworkException",
    "EncodingException",
]


logger = logging.getLogger(__name__)


def create_sink(config: TelemetryConfig | None = None) -> TelemetrySink:
    """
    Create the sink selected by configuration.

    Returns a NullTelemetry when telemetry is disabled. Otherwise connects
    a TelemetryClient; if that fails and ``fallback_to_null`` is set, the
    failure is logged and a NullTelemetry is returned instead of raising.
    """
    if config is None:
        config = TelemetryConfig()

    if not config.enabled:
        logger.info("Telemetry disabled, using NullTelemetry")
        return NullTelemetry()

    try:
        return TelemetryClient.from_config(config)
    except NetworkException as e:
        if not config.fallback_to_null:
            raise
        logger.warning(f"Telemetry collector unavailable, falling back to NullTelemetry: {e}")
        return NullTelemetry()


# Module-level default sink
_default_sink: TelemetrySink | None = None
_default_lock = threading.Lock()


def configure(config: TelemetryConfig | None = None) -> TelemetrySink:
    """Replace the default sink with one built from ``config``."""
    global _default_sink
    with _default_lock:
        previous, _default_sink = _default_sink, None
        if previous is not None:
            previous.close()
        _default_sink = create_sink(config)
        return _default_sink


def _get_sink() -> TelemetrySink:
    """Get or create the default sink."""
    global _default_sink
    with _default_lock:
        if _default_sink is None:
            _default_sink = create_sink()
        return _default_sink


def log(label: Any, data: PayloadOrSupplier = dict) -> None:
    """
    Log an event using the default sink.

    Usage:
        import telemetry_client
        telemetry_client.log("login", {"user": "alice"})
    """
    _get_sink().log(label, data)


def shutdown() -> None:
    """Close and forget the default sink."""
    global _default_sink
    with _default_lock:
        sink, _default_sink = _default_sink, None
    if sink is not None:
        sink.close()
