"""Client configuration."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes", "on")


def _env_timeout() -> float | None:
    value = os.environ.get("TELEMETRY_CONNECT_TIMEOUT")
    return float(value) if value else None


@dataclass
class TelemetryConfig:
    """
    Configuration for the telemetry client.

    Can be set via:
    - Constructor arguments
    - Environment variables (TELEMETRY_*)
    - Config file (YAML or JSON)
    """
    # Collector endpoint
    host: str = field(
        default_factory=lambda: os.environ.get("TELEMETRY_HOST", "localhost")
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("TELEMETRY_PORT", "1845"))
    )

    # Disabled telemetry uses the no-op sink
    enabled: bool = field(
        default_factory=lambda: _env_bool("TELEMETRY_ENABLED", "true")
    )

    # Connect timeout (seconds, None = OS default)
    connect_timeout: float | None = field(default_factory=_env_timeout)

    # Use the no-op sink instead of raising when the collector is unreachable
    fallback_to_null: bool = field(
        default_factory=lambda: _env_bool("TELEMETRY_FALLBACK", "false")
    )

    @classmethod
    def from_dict(cls, data: dict) -> TelemetryConfig:
        """Create config from dictionary."""
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: str) -> TelemetryConfig:
        """
        Load config from YAML file.

        Accepts either top-level keys or a ``telemetry:`` section.
        """
        import yaml
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data.get("telemetry", data))

    @classmethod
    def from_json(cls, path: str) -> TelemetryConfig:
        """Load config from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data.get("telemetry", data))
