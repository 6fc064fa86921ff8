"""
Subgraph Monitor — block-height health checker for a subgraph indexer.

Polls the subgraph's indexing status and the chain's head block on a fixed
interval, decides whether the subgraph is keeping up, and publishes the
verdict over HTTP as JSON, Prometheus metrics and an HTML dashboard.
"""

__version__ = "0.1.0"
