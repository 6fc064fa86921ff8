"""
Prometheus metrics mirror of the latest HealthVerdict.

One MonitorMetrics is built at startup and shared by the poll loop (writer)
and the /metrics handler (reader). Gauges live on their own CollectorRegistry
rather than the process-global default one.
"""

from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Gauge, generate_latest

from subgraph_monitor.health.models import HealthVerdict

METRICS_CONTENT_TYPE = CONTENT_TYPE_LATEST


class MonitorMetrics:
    """Four independent gauges; no cross-gauge atomicity."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        # Duplicate names raise ValueError here; callers treat that as fatal.
        self.registry = registry if registry is not None else CollectorRegistry()
        self.healthy = Gauge(
            "subgraph_healthy", "Whether the subgraph is healthy", registry=self.registry
        )
        self.synced_block = Gauge(
            "subgraph_synced_block", "The latest indexed block height", registry=self.registry
        )
        self.chain_head = Gauge(
            "subgraph_chain_head", "The current chain head block height", registry=self.registry
        )
        self.blocks_behind = Gauge(
            "subgraph_blocks_behind", "How many blocks behind the subgraph is", registry=self.registry
        )

    def update(self, verdict: HealthVerdict) -> None:
        self.healthy.set(1 if verdict.healthy else 0)
        self.synced_block.set(verdict.synced_block_height)
        self.chain_head.set(verdict.chain_head_block_height)
        self.blocks_behind.set(verdict.blocks_behind)

    def render(self) -> bytes:
        """Text exposition of all gauges."""
        return generate_latest(self.registry)
