"""
Configuration management for Subgraph Monitor.

Loads and validates settings from command-line flags, environment variables
and an optional .env file. Exposes a single source of truth for the service.
"""

from subgraph_monitor.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
