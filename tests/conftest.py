"""
Pytest fixtures for Subgraph Monitor tests.

Upstreams are faked with httpx.MockTransport so no network is needed.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

SUBGRAPH_URL = "http://subgraph.test/subgraphs/name/test"
RPC_URL = "http://rpc.test/"


def meta_body(number: int, has_errors: bool = False, block_hash: str = "0xabc") -> dict[str, Any]:
    """Subgraph _meta response body."""
    return {
        "data": {
            "_meta": {
                "block": {"number": number, "hash": block_hash},
                "hasIndexingErrors": has_errors,
            }
        }
    }


def rpc_body(height: int) -> dict[str, Any]:
    """eth_blockNumber response body."""
    return {"jsonrpc": "2.0", "id": 1, "result": hex(height)}


@pytest.fixture
def make_http_client() -> Callable[..., httpx.Client]:
    """
    Build an httpx.Client whose requests to SUBGRAPH_URL / RPC_URL are answered by
    the given responders. A responder is an httpx.Response, a dict (sent as JSON 200),
    or an exception instance to raise. Every request is recorded in client.calls.
    """
    clients: list[httpx.Client] = []

    def factory(subgraph: Any = None, rpc: Any = None) -> httpx.Client:
        calls: list[tuple[str, dict[str, Any]]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            url = str(request.url)
            calls.append((url, json.loads(request.content or b"null")))
            responder = subgraph if url == SUBGRAPH_URL else rpc
            if responder is None:
                raise httpx.ConnectError("no route", request=request)
            if isinstance(responder, Exception):
                raise responder
            if isinstance(responder, httpx.Response):
                return responder
            return httpx.Response(200, json=responder)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        client.calls = calls  # type: ignore[attr-defined]
        clients.append(client)
        return client

    yield factory
    for c in clients:
        c.close()


@pytest.fixture
def poller_config():
    from subgraph_monitor.poller.runner import PollerConfig

    return PollerConfig(subgraph_url=SUBGRAPH_URL, rpc_url=RPC_URL, interval_sec=60.0, request_timeout_sec=5.0)


@pytest.fixture
def settings():
    from subgraph_monitor.config.settings import Settings

    return Settings(subgraph_url=SUBGRAPH_URL, rpc_url=RPC_URL, api_port=3000, interval_sec=60.0)


@pytest.fixture
def store():
    from subgraph_monitor.health.store import StatusStore

    return StatusStore()


@pytest.fixture
def metrics():
    from subgraph_monitor.metrics import MonitorMetrics

    return MonitorMetrics()


@pytest.fixture
def api_client(settings, store, metrics):
    """FastAPI TestClient over a shared store/metrics, background poller disabled."""
    from fastapi.testclient import TestClient

    from subgraph_monitor.api_server.server import create_app

    app = create_app(settings, store=store, metrics=metrics, start_poller=False)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def meta() -> Callable[..., dict[str, Any]]:
    return meta_body


@pytest.fixture
def rpc() -> Callable[[int], dict[str, Any]]:
    return rpc_body
