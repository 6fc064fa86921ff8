"""
Upstream clients package.

Single-shot queries against the subgraph (GraphQL _meta) and the chain RPC
(eth_blockNumber), plus the cycle-local result types they produce.
"""

from subgraph_monitor.upstream.client import (
    decode_hex_quantity,
    fetch_chain_head,
    fetch_indexing_status,
)
from subgraph_monitor.upstream.models import ChainHead, IndexingStatus

__all__ = [
    "ChainHead",
    "IndexingStatus",
    "decode_hex_quantity",
    "fetch_chain_head",
    "fetch_indexing_status",
]
