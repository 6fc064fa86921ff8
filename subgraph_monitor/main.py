"""
Main entrypoint: poll loop in a background thread + FastAPI server in the main thread.

The poll loop is started by the app lifespan, so it runs exactly as long as the
server does. On SIGINT/SIGTERM uvicorn shuts down, the lifespan stops the loop
and the process exits.

Flags override env: -e/--endpoint, -r/--rpc, -p/--port, -i/--interval, --log-level (see --help).
"""

from __future__ import annotations

import sys
from typing import Sequence

# Configure structured JSON logging before other imports that may log
from subgraph_monitor.monitor_logging import configure_structlog, get_logger

logger = get_logger("main")


def main(argv: Sequence[str] | None = None) -> None:
    """Load settings, build shared state and serve until shutdown."""
    from subgraph_monitor.api_server.server import create_app
    from subgraph_monitor.config import get_settings
    from subgraph_monitor.core.exceptions import ConfigError
    from subgraph_monitor.health.store import StatusStore
    from subgraph_monitor.metrics import MonitorMetrics

    try:
        settings = get_settings(argv)
    except ConfigError as e:
        logger.error("main_config_error", error=str(e))
        sys.exit(1)

    configure_structlog(level=settings.log_level)

    # Registration failures are build defects: let them abort startup.
    metrics = MonitorMetrics()
    store = StatusStore()

    logger.info(
        "monitor_starting",
        subgraph_url=settings.subgraph_url,
        rpc_url=settings.rpc_url,
        interval_sec=settings.interval_sec,
        request_timeout_sec=settings.effective_request_timeout_sec,
        listen=f"http://{settings.api_host}:{settings.api_port}",
    )

    app = create_app(settings, store=store, metrics=metrics)

    import uvicorn

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
