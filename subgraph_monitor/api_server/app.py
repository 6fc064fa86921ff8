"""
FastAPI/ASGI application entrypoint.

Builds the app from environment settings (command line is ignored here).
Run with: uvicorn subgraph_monitor.api_server.app:app --host 0.0.0.0 --port 3000
"""

from subgraph_monitor.api_server.server import create_app
from subgraph_monitor.config import get_settings

app = create_app(get_settings([]))

__all__ = ["app"]
