"""
StatusStore: single-slot holder of the latest HealthVerdict.

Verdicts are immutable, so publishing is a reference swap. Readers take the
current reference without locking and always see one complete verdict. The
writer lock only serialises publishers; its critical section is one assignment.
"""

from __future__ import annotations

import threading

from subgraph_monitor.health.models import INITIAL_VERDICT, HealthVerdict


class StatusStore:
    """Latest verdict, shared between the poll loop (writer) and HTTP handlers (readers)."""

    def __init__(self, initial: HealthVerdict = INITIAL_VERDICT) -> None:
        self._current = initial
        self._write_lock = threading.Lock()

    def snapshot(self) -> HealthVerdict:
        """Return the most recently published verdict."""
        return self._current

    def publish(self, verdict: HealthVerdict) -> None:
        """Replace the current verdict. No I/O inside the lock."""
        with self._write_lock:
            self._current = verdict
