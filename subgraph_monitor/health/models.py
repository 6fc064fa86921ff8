"""
HealthVerdict: the one long-lived value, replaced wholesale once per cycle.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class HealthVerdict:
    """
    Latest subgraph health snapshot.

    blocks_behind equals chain_head_block_height - synced_block_height when both
    heights were obtained in the same cycle; otherwise head and behind are 0.
    last_checked is the RFC 3339 time at which that cycle began ("" before the first cycle).
    """

    healthy: bool = False
    synced_block_height: int = 0
    chain_head_block_height: int = 0
    blocks_behind: int = 0
    last_checked: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "healthy": self.healthy,
            "synced_block_height": self.synced_block_height,
            "chain_head_block_height": self.chain_head_block_height,
            "blocks_behind": self.blocks_behind,
            "last_checked": self.last_checked,
        }


INITIAL_VERDICT = HealthVerdict()
