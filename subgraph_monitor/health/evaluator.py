"""
Health evaluation: indexing status + chain head -> HealthVerdict.

Pure rules, no I/O and no clock reads. A failed fetch is passed in as None.

Policy:
- indexing status failed      -> unhealthy; all heights 0 (nothing carried over)
- indexing errors reported    -> unhealthy whatever the lag; lag still reported
- both fetched, no errors     -> healthy iff blocks_behind <= BLOCKS_BEHIND_THRESHOLD
- chain head failed           -> healthy iff no indexing errors; lag not evaluated
"""

from __future__ import annotations

from subgraph_monitor.health.models import HealthVerdict
from subgraph_monitor.upstream.models import ChainHead, IndexingStatus

# Maximum lag (in blocks) still considered healthy. Fixed policy, not configurable.
BLOCKS_BEHIND_THRESHOLD = 20


def is_within_threshold(blocks_behind: int, threshold: int = BLOCKS_BEHIND_THRESHOLD) -> bool:
    """True if the subgraph is at most `threshold` blocks behind the chain head."""
    return blocks_behind <= threshold


def evaluate_health(
    indexing_status: IndexingStatus | None,
    chain_head: ChainHead | None,
    checked_at: str,
) -> HealthVerdict:
    """
    Combine one cycle's upstream results into a verdict.

    Args:
        indexing_status: parsed subgraph status, or None if that fetch failed.
        chain_head: parsed chain head, or None if that fetch failed or was skipped.
        checked_at: timestamp captured at the start of the cycle.
    """
    if indexing_status is None:
        return HealthVerdict(healthy=False, last_checked=checked_at)

    synced = indexing_status.synced_block
    no_errors = not indexing_status.has_indexing_errors

    if chain_head is None:
        return HealthVerdict(
            healthy=no_errors,
            synced_block_height=synced,
            last_checked=checked_at,
        )

    head = chain_head.block_height
    blocks_behind = head - synced
    return HealthVerdict(
        healthy=no_errors and is_within_threshold(blocks_behind),
        synced_block_height=synced,
        chain_head_block_height=head,
        blocks_behind=blocks_behind,
        last_checked=checked_at,
    )
