"""
Application-level exceptions.

Upstream failures fall into three kinds, all handled the same way by the
poll loop (logged, folded into the verdict, never retried):

- transport: the request never produced a response (connection error, timeout)
- protocol: a response came back but with a non-2xx status or an unexpected body
- decode: the chain head result was not a hexadecimal quantity

ConfigError is the only fatal category; it is raised while loading settings.
"""

from __future__ import annotations


class MonitorError(Exception):
    """Base class for all subgraph monitor errors."""


class ConfigError(MonitorError):
    """Invalid static configuration; aborts startup."""


class UpstreamError(MonitorError):
    """A single upstream query failed."""

    def __init__(self, endpoint: str, message: str) -> None:
        super().__init__(f"{message} ({endpoint})")
        self.endpoint = endpoint
        self.reason = message


class UpstreamTransportError(UpstreamError):
    """Connection, DNS or timeout failure before a response was received."""


class UpstreamProtocolError(UpstreamError):
    """Non-success status, non-JSON body or a body of the wrong shape."""


class ChainHeadDecodeError(UpstreamError):
    """Chain head result could not be parsed as a hex quantity."""
