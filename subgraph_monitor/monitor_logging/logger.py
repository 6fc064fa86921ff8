"""
Structured logging for the monitor process.

Poll-cycle outcomes (subgraph_check) are diagnostics on stdout; upstream
failures and crashed cycles are warnings/errors and go to stderr, so a
supervisor can separate "the subgraph is behind" from "the monitor cannot
reach it". Every line carries service, logger, level, event_type and an ISO
timestamp.

Configured on first import from LOG_LEVEL / LOG_FORMAT; main() reconfigures
with the validated settings. No subgraph_monitor imports to avoid circular imports.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

import structlog

SERVICE_NAME = "subgraph-monitor"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()

_STDERR_METHODS = frozenset({"warning", "warn", "error", "err", "critical", "exception", "fatal", "failure"})


class LevelRoutedLogger:
    """
    structlog output logger: debug/info lines to stdout, warning and above to stderr.

    Streams are looked up per call so redirected sys.stdout/sys.stderr are honoured.
    """

    def _write(self, stream: TextIO, message: str) -> None:
        print(message, file=stream, flush=True)

    def _emit(self, method_name: str, message: str) -> None:
        stream = sys.stderr if method_name in _STDERR_METHODS else sys.stdout
        self._write(stream, message)

    def __getattr__(self, method_name: str):
        return lambda message: self._emit(method_name, message)


def _level_routed_factory(*args: Any) -> LevelRoutedLogger:
    return LevelRoutedLogger()


def _add_service_context(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Stamp service name and ISO 8601 UTC timestamp."""
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def _event_to_event_type(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def resolve_level(level: str | int | None) -> int:
    """Map a level name ("info", "WARNING", "trace") or number to a logging level; unknown -> INFO."""
    if isinstance(level, int):
        return level
    name = (level or "INFO").upper()
    if name == "TRACE":
        return logging.DEBUG
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def configure_structlog(level: str | int | None = None, fmt: str | None = None) -> None:
    """(Re)configure structlog: level filter, JSON or console rendering, stdout/stderr routing."""
    fmt = (fmt or LOG_FORMAT).strip().lower()
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        _add_service_context,
    ]
    if fmt == "json":
        processors += [_event_to_event_type, structlog.processors.JSONRenderer(sort_keys=True)]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    # Not cached: loggers created at import pick up a later reconfigure from main().
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(resolve_level(level or LOG_LEVEL)),
        context_class=dict,
        logger_factory=_level_routed_factory,
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> Any:
    """
    Return a structured logger bound to a module name.

        logger = get_logger(__name__)
        logger.warning("chain_head_query_failed", endpoint=url, error_kind="UpstreamTransportError")
    """
    return structlog.get_logger(name, logger=name)
