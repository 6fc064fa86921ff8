"""
API server package — HTTP interface over the latest health verdict.

Serves /health (JSON), /metrics (Prometheus text) and / (HTML dashboard).
"""
