"""
FastAPI server — read-only view over the StatusStore.

GET /health returns the latest verdict as JSON (200 healthy / 503 unhealthy),
GET /metrics the Prometheus exposition, GET / the HTML dashboard. Handlers
only read; the background poll loop started in the lifespan is the only writer.
"""

from __future__ import annotations

import threading
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from pydantic import BaseModel, Field

from subgraph_monitor import __version__
from subgraph_monitor.api_server.dashboard import render_dashboard
from subgraph_monitor.config.settings import Settings
from subgraph_monitor.health.store import StatusStore
from subgraph_monitor.metrics import METRICS_CONTENT_TYPE, MonitorMetrics
from subgraph_monitor.monitor_logging import get_logger
from subgraph_monitor.poller.runner import (
    SHUTDOWN_JOIN_TIMEOUT_SEC,
    PollerConfig,
    start_poll_thread,
)

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Response models
# -----------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """GET /health response: the latest verdict."""

    healthy: bool = Field(..., description="No indexing errors and within the lag threshold")
    synced_block_height: int = Field(..., description="Latest block indexed by the subgraph")
    chain_head_block_height: int = Field(..., description="Chain head from the RPC endpoint (0 if unavailable)")
    blocks_behind: int = Field(..., description="chain_head_block_height - synced_block_height")
    last_checked: str = Field(..., description="RFC 3339 time the last check started")


# -----------------------------------------------------------------------------
# Lifespan: start background poll loop (never blocks API)
# -----------------------------------------------------------------------------


def _make_lifespan(start_poller: bool):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Start the poll loop in a background thread; signal stop on shutdown."""
        if not start_poller:
            yield
            return

        stop_event = threading.Event()
        config = PollerConfig.from_settings(app.state.settings)
        thread = start_poll_thread(config, app.state.store, app.state.metrics, stop_event)
        logger.info("api_poller_started", interval_sec=config.interval_sec)

        yield

        stop_event.set()
        thread.join(timeout=SHUTDOWN_JOIN_TIMEOUT_SEC)
        if thread.is_alive():
            logger.warning("api_poller_shutdown_timeout", timeout_sec=SHUTDOWN_JOIN_TIMEOUT_SEC)
        else:
            logger.info("api_poller_stopped")

    return lifespan


# -----------------------------------------------------------------------------
# App and routes
# -----------------------------------------------------------------------------


def create_app(
    settings: Settings,
    store: StatusStore | None = None,
    metrics: MonitorMetrics | None = None,
    start_poller: bool = True,
) -> FastAPI:
    """
    Build the ASGI app around one StatusStore and one MonitorMetrics.

    Args:
        settings: validated monitor settings.
        store: shared verdict store; a fresh one if None.
        metrics: shared gauges; a fresh registry if None.
        start_poller: run the background poll loop for the app's lifetime.
    """
    app = FastAPI(
        title="Subgraph Monitor",
        description="Subgraph block height health, Prometheus metrics and dashboard.",
        version=__version__,
        lifespan=_make_lifespan(start_poller),
    )
    app.state.settings = settings
    app.state.store = store if store is not None else StatusStore()
    app.state.metrics = metrics if metrics is not None else MonitorMetrics()

    @app.get("/health", response_model=HealthResponse)
    def health(request: Request) -> JSONResponse:
        """Latest verdict; HTTP 503 when unhealthy."""
        verdict = request.app.state.store.snapshot()
        return JSONResponse(
            status_code=200 if verdict.healthy else 503,
            content=HealthResponse(**verdict.to_dict()).model_dump(),
        )

    @app.get("/metrics")
    def metrics_endpoint(request: Request) -> Response:
        """Prometheus text exposition of the four gauges."""
        return Response(
            content=request.app.state.metrics.render(),
            media_type=METRICS_CONTENT_TYPE,
        )

    @app.get("/", response_class=HTMLResponse)
    def dashboard(request: Request) -> HTMLResponse:
        """Human-readable dashboard."""
        settings_ = request.app.state.settings
        return HTMLResponse(
            render_dashboard(
                request.app.state.store.snapshot(),
                settings_.subgraph_url,
                settings_.rpc_url,
            )
        )

    return app
