"""
Poller package — the recurring background health check.
"""

from subgraph_monitor.poller.runner import (
    PollerConfig,
    check_subgraph,
    run_poll_loop,
    start_poll_thread,
)

__all__ = ["PollerConfig", "check_subgraph", "run_poll_loop", "start_poll_thread"]
