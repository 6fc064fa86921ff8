"""
Health package — verdict model, evaluation rules and the shared status store.
"""

from subgraph_monitor.health.evaluator import (
    BLOCKS_BEHIND_THRESHOLD,
    evaluate_health,
    is_within_threshold,
)
from subgraph_monitor.health.models import INITIAL_VERDICT, HealthVerdict
from subgraph_monitor.health.store import StatusStore

__all__ = [
    "BLOCKS_BEHIND_THRESHOLD",
    "INITIAL_VERDICT",
    "HealthVerdict",
    "StatusStore",
    "evaluate_health",
    "is_within_threshold",
]
