"""
Upstream query clients: subgraph indexing status and chain head.

Each function issues exactly one POST with a fixed JSON payload and either
returns a parsed result or raises an UpstreamError subclass. No retries and
no shared state; the caller owns the httpx.Client and its timeout.
"""

from __future__ import annotations

import re
from typing import Any

import httpx
from pydantic import ValidationError

from subgraph_monitor.core.exceptions import (
    ChainHeadDecodeError,
    UpstreamProtocolError,
    UpstreamTransportError,
)
from subgraph_monitor.monitor_logging import get_logger
from subgraph_monitor.upstream.models import (
    ChainHead,
    GraphQLMetaResponse,
    IndexingStatus,
    RpcResponse,
)

logger = get_logger(__name__)

INDEXING_STATUS_QUERY: dict[str, Any] = {
    "query": "{_meta{block{number hash}hasIndexingErrors}}",
}
CHAIN_HEAD_REQUEST: dict[str, Any] = {
    "jsonrpc": "2.0",
    "method": "eth_blockNumber",
    "params": [],
    "id": 1,
}

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")


def _post_json(client: httpx.Client, endpoint: str, payload: dict[str, Any]) -> Any:
    """POST payload as JSON; return the decoded JSON body."""
    try:
        resp = client.post(endpoint, json=payload)
    except httpx.TransportError as e:
        raise UpstreamTransportError(endpoint, f"request failed: {e!r}") from e
    except httpx.RequestError as e:
        # Body decoding, redirect loops: a response arrived but was unusable.
        raise UpstreamProtocolError(endpoint, f"unreadable response: {e!r}") from e
    try:
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise UpstreamProtocolError(endpoint, f"HTTP {resp.status_code}") from e
    try:
        return resp.json()
    except ValueError as e:
        raise UpstreamProtocolError(endpoint, "response body is not JSON") from e


def fetch_indexing_status(client: httpx.Client, endpoint: str) -> IndexingStatus:
    """
    Query the subgraph's _meta block for the latest indexed block and error flag.

    Raises:
        UpstreamTransportError: no response received.
        UpstreamProtocolError: non-2xx status, GraphQL errors or unexpected body.
    """
    body = _post_json(client, endpoint, INDEXING_STATUS_QUERY)
    if isinstance(body, dict) and body.get("errors") and not body.get("data"):
        raise UpstreamProtocolError(endpoint, f"GraphQL errors: {body['errors']}")
    try:
        parsed = GraphQLMetaResponse.model_validate(body)
    except ValidationError as e:
        raise UpstreamProtocolError(
            endpoint, f"unexpected indexing status shape: {e.error_count()} error(s)"
        ) from e
    status = IndexingStatus.from_response(parsed)
    logger.debug(
        "indexing_status_fetched",
        synced_block=status.synced_block,
        block_hash=status.synced_block_hash,
        has_indexing_errors=status.has_indexing_errors,
    )
    return status


def decode_hex_quantity(value: str) -> int:
    """
    Decode a JSON-RPC hex quantity ("0x1b4") to int.

    Raises ValueError for empty digits or non-hex characters.
    """
    digits = value[2:] if value[:2] in ("0x", "0X") else value
    if not _HEX_DIGITS.fullmatch(digits):
        raise ValueError(f"invalid hex quantity: {value!r}")
    return int(digits, 16)


def fetch_chain_head(client: httpx.Client, endpoint: str) -> ChainHead:
    """
    Query eth_blockNumber on the RPC endpoint.

    Raises:
        UpstreamTransportError: no response received.
        UpstreamProtocolError: non-2xx status, JSON-RPC error or missing result.
        ChainHeadDecodeError: result is not a hex quantity.
    """
    body = _post_json(client, endpoint, CHAIN_HEAD_REQUEST)
    if isinstance(body, dict) and body.get("error"):
        raise UpstreamProtocolError(endpoint, f"RPC error: {body['error']}")
    try:
        parsed = RpcResponse.model_validate(body)
    except ValidationError as e:
        raise UpstreamProtocolError(endpoint, "RPC response has no string result") from e
    try:
        height = decode_hex_quantity(parsed.result)
    except ValueError as e:
        raise ChainHeadDecodeError(endpoint, str(e)) from e
    logger.debug("chain_head_fetched", block_height=height)
    return ChainHead(block_height=height)
