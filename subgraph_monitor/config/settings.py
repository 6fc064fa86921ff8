"""
Application settings.

Static configuration, loaded once at startup. Precedence per setting:
command-line flag > environment variable (or .env) > built-in default.
"""

from __future__ import annotations

import argparse
import math
from dataclasses import dataclass
from typing import Sequence

from subgraph_monitor.config.env import (
    DEFAULT_API_HOST,
    DEFAULT_API_PORT,
    DEFAULT_CHECK_INTERVAL_SEC,
    DEFAULT_LOG_LEVEL,
    DEFAULT_RPC_ENDPOINT,
    DEFAULT_SUBGRAPH_ENDPOINT,
    LOG_LEVELS,
    env_float,
    env_int,
    env_str,
    load_monitor_env,
)
from subgraph_monitor.core.exceptions import ConfigError


@dataclass(frozen=True)
class Settings:
    """Typed monitor settings."""

    subgraph_url: str = DEFAULT_SUBGRAPH_ENDPOINT
    rpc_url: str = DEFAULT_RPC_ENDPOINT
    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT
    interval_sec: float = DEFAULT_CHECK_INTERVAL_SEC
    # None: bounded by the poll interval
    request_timeout_sec: float | None = None
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def effective_request_timeout_sec(self) -> float:
        """Per-request upstream timeout; a hung upstream never stalls more than one interval per fetch."""
        if self.request_timeout_sec is not None:
            return self.request_timeout_sec
        return self.interval_sec

    def validate(self) -> "Settings":
        if not self.subgraph_url:
            raise ConfigError("subgraph endpoint must be non-empty")
        if not self.rpc_url:
            raise ConfigError("RPC endpoint must be non-empty")
        if not 1 <= self.api_port <= 65535:
            raise ConfigError(f"port must be in 1..65535, got {self.api_port}")
        if not math.isfinite(self.interval_sec) or self.interval_sec <= 0:
            raise ConfigError(f"interval must be a positive finite number, got {self.interval_sec}")
        if self.request_timeout_sec is not None and (
            not math.isfinite(self.request_timeout_sec) or self.request_timeout_sec <= 0
        ):
            raise ConfigError(f"request timeout must be a positive finite number, got {self.request_timeout_sec}")
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"log level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")
        return self


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="subgraph-monitor",
        description="Subgraph block height monitor: health, metrics and dashboard over HTTP.",
    )
    parser.add_argument("-e", "--endpoint", help="Subgraph endpoint URL")
    parser.add_argument("-r", "--rpc", help="RPC endpoint URL")
    parser.add_argument("-p", "--port", type=int, help="Port to run the monitor on")
    parser.add_argument("--host", help="Address to bind the HTTP server to")
    parser.add_argument("-i", "--interval", type=float, help="Check interval in seconds")
    parser.add_argument(
        "--request-timeout",
        type=float,
        help="Timeout for each upstream request in seconds (default: the check interval)",
    )
    parser.add_argument("--log-level", type=str.lower, help="Log level: " + ", ".join(LOG_LEVELS))
    return parser


def settings_from_env() -> Settings:
    """Settings from environment only (after loading .env)."""
    load_monitor_env()
    return Settings(
        subgraph_url=env_str("SUBGRAPH_ENDPOINT", DEFAULT_SUBGRAPH_ENDPOINT),
        rpc_url=env_str("RPC_ENDPOINT", DEFAULT_RPC_ENDPOINT),
        api_host=env_str("API_HOST", DEFAULT_API_HOST),
        api_port=env_int("API_PORT", DEFAULT_API_PORT),
        interval_sec=env_float("CHECK_INTERVAL_SEC", DEFAULT_CHECK_INTERVAL_SEC),
        request_timeout_sec=env_float("REQUEST_TIMEOUT_SEC", None),
        log_level=env_str("LOG_LEVEL", DEFAULT_LOG_LEVEL).lower(),
    )


def get_settings(argv: Sequence[str] | None = None) -> Settings:
    """
    Return validated settings.

    Args:
        argv: command-line arguments (without program name). None means
            sys.argv[1:]; pass [] to ignore the command line.

    Raises:
        ConfigError: on any invalid value.
    """
    base = settings_from_env()
    args = build_arg_parser().parse_args(argv)
    overrides = {
        "subgraph_url": args.endpoint,
        "rpc_url": args.rpc,
        "api_host": args.host,
        "api_port": args.port,
        "interval_sec": args.interval,
        "request_timeout_sec": args.request_timeout,
        "log_level": args.log_level,
    }
    values = {k: v for k, v in overrides.items() if v is not None}
    merged = Settings(**{**base.__dict__, **values})
    return merged.validate()
