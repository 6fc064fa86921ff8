"""
Structured logging for Subgraph Monitor.

JSON logs with timestamp, level, logger and event_type; info to stdout,
warnings and errors to stderr. Use get_logger() in all modules.
"""

from subgraph_monitor.monitor_logging.logger import configure_structlog, get_logger

__all__ = ["configure_structlog", "get_logger"]
