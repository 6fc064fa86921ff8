"""
Data models for upstream query results.

IndexingStatus and ChainHead are cycle-local values produced by the clients
and consumed by the health evaluator. The pydantic models below describe the
exact response shapes the clients accept; anything else is a protocol error.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt


@dataclass(frozen=True)
class IndexingStatus:
    """Subgraph's latest indexed block and its indexing-error flag."""

    synced_block: int
    has_indexing_errors: bool
    synced_block_hash: str | None = None

    @classmethod
    def from_response(cls, response: "GraphQLMetaResponse") -> "IndexingStatus":
        meta = response.data.meta
        return cls(
            synced_block=meta.block.number,
            has_indexing_errors=meta.has_indexing_errors,
            synced_block_hash=meta.block.hash,
        )


@dataclass(frozen=True)
class ChainHead:
    """Current chain tip as reported by the RPC node."""

    block_height: int


# -----------------------------------------------------------------------------
# Wire shapes
# -----------------------------------------------------------------------------


class MetaBlock(BaseModel):
    number: StrictInt
    hash: str | None = None


class Meta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    block: MetaBlock
    has_indexing_errors: StrictBool = Field(..., alias="hasIndexingErrors")


class MetaData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    meta: Meta = Field(..., alias="_meta")


class GraphQLMetaResponse(BaseModel):
    """{"data": {"_meta": {"block": {"number", "hash"}, "hasIndexingErrors"}}}"""

    data: MetaData


class RpcResponse(BaseModel):
    """JSON-RPC 2.0 response carrying a string result."""

    result: str
