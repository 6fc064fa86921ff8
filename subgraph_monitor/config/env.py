"""
Environment variable loading for Subgraph Monitor.

- SUBGRAPH_ENDPOINT: subgraph GraphQL URL
- RPC_ENDPOINT: chain JSON-RPC URL
- API_HOST / API_PORT: HTTP listen address
- CHECK_INTERVAL_SEC: poll interval in seconds
- REQUEST_TIMEOUT_SEC: per-request upstream timeout in seconds
- LOG_LEVEL: server and application log level (info, debug, ...)
- Loads .env from the working directory or project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from subgraph_monitor.core.exceptions import ConfigError

# Project root: config is subgraph_monitor/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_SUBGRAPH_ENDPOINT = "https://flare-query.sceptre.fi/subgraphs/name/sflr-subgraph"
DEFAULT_RPC_ENDPOINT = "https://flare.gateway.tenderly.co"
DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 3000
DEFAULT_CHECK_INTERVAL_SEC = 60.0
DEFAULT_LOG_LEVEL = "info"

# Levels uvicorn accepts for --log-level
LOG_LEVELS = ("critical", "error", "warning", "info", "debug", "trace")


def load_monitor_env() -> None:
    """Load .env from cwd, then project root. Existing variables are not overridden."""
    from dotenv import load_dotenv

    load_dotenv(Path.cwd() / ".env")
    load_dotenv(_ENV_PATH)


def env_str(name: str, default: str) -> str:
    """Return a stripped env value, or default when unset or blank."""
    raw = (os.getenv(name) or "").strip()
    return raw or default


def env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


def env_float(name: str, default: float | None) -> float | None:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e
