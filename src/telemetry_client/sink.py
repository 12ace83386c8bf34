"""Sink interface and the no-op sink."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .frame import PayloadOrSupplier, resolve_payload


class TelemetrySink(ABC):
    """
    Abstract base class for telemetry sinks.

    A sink accepts labeled events via log() until close() is called.
    Call sites hold a TelemetrySink and never need to know whether
    telemetry is actually enabled.
    """

    @abstractmethod
    def log(self, label: Any, data: PayloadOrSupplier = dict) -> None:
        """
        Emit one event.

        ``data`` is either the payload or a zero-argument callable
        returning it; a callable is evaluated exactly once.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the sink's resources."""
        ...

    def __enter__(self) -> TelemetrySink:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class NullTelemetry(TelemetrySink):
    """
    Sink that drops everything.

    Used when telemetry is disabled. Suppliers are still invoked once so
    side effects callers rely on keep happening; the result is discarded.
    """

    def log(self, label: Any, data: PayloadOrSupplier = dict) -> None:
        resolve_payload(data)

    def close(self) -> None:
        pass

    def __repr__(self) -> str:
        return "NullTelemetry()"
