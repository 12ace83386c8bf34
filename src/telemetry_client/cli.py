#!/usr/bin/env python3
"""
CLI tool for sending events to a telemetry collector.

Usage:
    python -m telemetry_client.cli send deploy '{"service": "api", "version": "1.4.2"}'
    python -m telemetry_client.cli --host collector --port 1845 send heartbeat
    python -m telemetry_client.cli --config config.yaml check
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from colorama import Fore, Style, init as colorama_init

from .client import TelemetryClient
from .config import TelemetryConfig
from .errors import TelemetryError
from .frame import encode_frame


def colorize(text: str, color: str) -> str:
    """Apply color to text."""
    return f"{color}{text}{Style.RESET_ALL}"


def print_error(message: str) -> None:
    print(colorize(f"Error: {message}", Fore.RED), file=sys.stderr)


def _load_config(args) -> TelemetryConfig:
    """Config file first, then command-line overrides."""
    config = TelemetryConfig.from_yaml(args.config) if args.config else TelemetryConfig()
    if args.host:
        config.host = args.host
    if args.port is not None:
        config.port = args.port
    return config


def cmd_send(args) -> int:
    """Send a single event."""
    try:
        payload = json.loads(args.json)
    except json.JSONDecodeError as e:
        print_error(f"invalid JSON payload: {e}")
        return 1

    config = _load_config(args)

    try:
        with TelemetryClient.from_config(config) as client:
            client.log(args.label, payload)
    except TelemetryError as e:
        print_error(f"{e.kind.value} failure: {e}")
        return 1

    frame = encode_frame(args.label, payload).decode().rstrip("\n")
    print(colorize("Sent:", Style.BRIGHT), f"{config.host}:{config.port}", colorize(frame, Fore.GREEN))
    return 0


def cmd_check(args) -> int:
    """Check that the collector accepts connections."""
    config = _load_config(args)
    endpoint = f"{config.host}:{config.port}"

    try:
        TelemetryClient.from_config(config).close()
    except TelemetryError as e:
        print(colorize("Unreachable:", Style.BRIGHT), colorize(endpoint, Fore.RED), f"({e})")
        return 1

    print(colorize("Reachable:", Style.BRIGHT), colorize(endpoint, Fore.GREEN))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="CLI tool for the telemetry collector",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--host",
        help="Collector host (default: TELEMETRY_HOST or localhost)",
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Collector port (default: TELEMETRY_PORT or 1845)",
    )
    parser.add_argument(
        "--config",
        help="YAML config file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # send command
    send_parser = subparsers.add_parser("send", help="Send one event")
    send_parser.add_argument("label", help="Event label (e.g., deploy)")
    send_parser.add_argument("json", nargs="?", default="{}", help="JSON payload (default: {})")

    # check command
    subparsers.add_parser("check", help="Check the collector is reachable")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    colorama_init()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if args.command == "send":
        return cmd_send(args)
    elif args.command == "check":
        return cmd_check(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
