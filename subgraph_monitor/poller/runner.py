"""
Poll loop: fetch -> evaluate -> publish, once immediately and then every interval.

- check_subgraph(): one cycle. Upstream failures are logged and folded into the
  verdict; they never propagate.
- run_poll_loop(): runs cycles until stop_event is set. Started by the FastAPI
  lifespan in a background thread, never blocks the API.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone

import httpx

from subgraph_monitor.config.env import DEFAULT_CHECK_INTERVAL_SEC
from subgraph_monitor.config.settings import Settings
from subgraph_monitor.core.exceptions import UpstreamError
from subgraph_monitor.health.evaluator import evaluate_health
from subgraph_monitor.health.models import HealthVerdict
from subgraph_monitor.health.store import StatusStore
from subgraph_monitor.metrics import MonitorMetrics
from subgraph_monitor.monitor_logging import get_logger
from subgraph_monitor.upstream.client import fetch_chain_head, fetch_indexing_status
from subgraph_monitor.upstream.models import ChainHead, IndexingStatus

logger = get_logger(__name__)

SHUTDOWN_JOIN_TIMEOUT_SEC = 15.0


@dataclass
class PollerConfig:
    """Config for the background poll loop."""

    subgraph_url: str
    rpc_url: str
    interval_sec: float = DEFAULT_CHECK_INTERVAL_SEC
    request_timeout_sec: float = DEFAULT_CHECK_INTERVAL_SEC

    @classmethod
    def from_settings(cls, settings: Settings) -> "PollerConfig":
        return cls(
            subgraph_url=settings.subgraph_url,
            rpc_url=settings.rpc_url,
            interval_sec=settings.interval_sec,
            request_timeout_sec=settings.effective_request_timeout_sec,
        )


def _now_rfc3339() -> str:
    return datetime.now(timezone.utc).isoformat()


def _run_cycle(config: PollerConfig, client: httpx.Client, checked_at: str) -> HealthVerdict:
    indexing_status: IndexingStatus | None = None
    chain_head: ChainHead | None = None

    try:
        indexing_status = fetch_indexing_status(client, config.subgraph_url)
    except UpstreamError as e:
        logger.warning(
            "indexing_status_query_failed",
            endpoint=e.endpoint,
            error_kind=type(e).__name__,
            error=e.reason,
        )

    # Chain head is only worth a request once the subgraph answered.
    if indexing_status is not None:
        try:
            chain_head = fetch_chain_head(client, config.rpc_url)
        except UpstreamError as e:
            logger.warning(
                "chain_head_query_failed",
                endpoint=e.endpoint,
                error_kind=type(e).__name__,
                error=e.reason,
            )

    return evaluate_health(indexing_status, chain_head, checked_at)


def check_subgraph(
    config: PollerConfig,
    store: StatusStore,
    metrics: MonitorMetrics,
    client: httpx.Client | None = None,
) -> HealthVerdict:
    """
    Run one health check cycle and publish its verdict.

    The timestamp is captured before any request so last_checked reports when
    the cycle began. Returns the published verdict.
    """
    checked_at = _now_rfc3339()
    if client is None:
        with httpx.Client(timeout=config.request_timeout_sec) as owned:
            verdict = _run_cycle(config, owned, checked_at)
    else:
        verdict = _run_cycle(config, client, checked_at)

    store.publish(verdict)
    metrics.update(verdict)

    logger.info(
        "subgraph_check",
        healthy=verdict.healthy,
        synced_block=verdict.synced_block_height,
        chain_head=verdict.chain_head_block_height,
        blocks_behind=verdict.blocks_behind,
    )
    return verdict


def run_poll_loop(
    config: PollerConfig,
    store: StatusStore,
    metrics: MonitorMetrics,
    stop_event: threading.Event,
    client: httpx.Client | None = None,
) -> None:
    """
    Check once immediately, then every interval_sec until stop_event is set.

    A crash inside a cycle is logged and the loop continues. A cycle that runs
    longer than the interval delays the next one instead of overlapping it.
    """
    interval = config.interval_sec
    logger.info(
        "poll_loop_started",
        interval_sec=interval,
        subgraph_url=config.subgraph_url,
        rpc_url=config.rpc_url,
    )
    cycle_count = 0
    while not stop_event.is_set():
        cycle_start = time.monotonic()
        cycle_count += 1
        try:
            check_subgraph(config, store, metrics, client=client)
        except Exception as e:
            logger.exception("poll_cycle_failed", cycle=cycle_count, error=str(e))
        deadline = cycle_start + interval
        remaining = deadline - time.monotonic()
        if remaining > 0:
            stop_event.wait(timeout=remaining)
    logger.info("poll_loop_stopped", cycle_count=cycle_count)


def start_poll_thread(
    config: PollerConfig,
    store: StatusStore,
    metrics: MonitorMetrics,
    stop_event: threading.Event,
) -> threading.Thread:
    """Start run_poll_loop in a daemon thread and return it."""
    thread = threading.Thread(
        target=run_poll_loop,
        args=(config, store, metrics, stop_event),
        name="subgraph-poller",
        daemon=True,
    )
    thread.start()
    return thread
