"""Error taxonomy for the telemetry client.

Every failure raised by the client is a TelemetryError of one of two kinds:
- network: the collector could not be reached, or went away mid-stream
- encoding: the event could not be turned into a frame

The underlying low-level error is kept on ``cause`` (and chained as
``__cause__``) so callers can log it.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """What went wrong, from the caller's point of view."""
    NETWORK = "network"
    ENCODING = "encoding"


class TelemetryError(Exception):
    """Base exception for telemetry client errors."""

    kind: ErrorKind

    def __init__(self, cause: BaseException | None = None, message: str | None = None):
        self.cause = cause
        if message is None:
            message = str(cause) if cause is not None else f"{self.kind.value} error"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Structured form for log records."""
        return {
            "kind": self.kind.value,
            "message": str(self),
            "cause_type": type(self.cause).__name__ if self.cause is not None else None,
        }


class NetworkException(TelemetryError):
    """Connection could not be established, or the peer is gone."""
    kind = ErrorKind.NETWORK


class EncodingException(TelemetryError):
    """Event could not be encoded as a frame."""
    kind = ErrorKind.ENCODING
