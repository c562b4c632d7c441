"""
Thread-safe holder for the latest prediction.
"""

from __future__ import annotations

import threading

import pandas as pd


class SnapshotStore:
    """
    Holds one prediction frame behind a lock.

    ``publish`` swaps in a new frame and ``read`` hands out a copy, both
    inside the same critical section, so a reader sees either the previous
    or the new prediction and never a frame that is being replaced.
    """

    def __init__(self, initial: pd.DataFrame) -> None:
        self._lock = threading.Lock()
        self._snapshot = initial.copy()

    def publish(self, snapshot: pd.DataFrame) -> None:
        snapshot = snapshot.copy()
        with self._lock:
            self._snapshot = snapshot

    def read(self) -> pd.DataFrame:
        with self._lock:
            return self._snapshot.copy()
