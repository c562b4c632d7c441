"""
Network-quality prediction for a moving client from historical day traces.

Each location update:
- matches the position against every day dataset (box filter, nearest record, gate)
- extracts the forward window after each day's anchor and rebases its time
- unions the windows and averages every metric per forward second
- publishes the result as the new prediction snapshot
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from carrier.analysis.aggregate import aggregate, combine, empty_prediction
from carrier.analysis.config import MatcherConfig
from carrier.analysis.matcher import match_day
from carrier.analysis.snapshot import SnapshotStore
from carrier.analysis.types import Position
from carrier.analysis.window import extract_window
from carrier.parsers.trajectory import load_days
from carrier.utils.log import get_logger

logger = get_logger(__name__)


class CarrierEnv:
    """
    Stateful predictor driven by an external caller.

    ``update_cell`` and ``update_location`` are typically called from a
    simulation thread while consumers call ``get_prediction`` from others.
    The serving cell and the snapshot each sit behind their own lock; the
    day datasets are only ever read after construction.
    """

    def __init__(self, files: Iterable[str | Path], cfg: Optional[MatcherConfig] = None) -> None:
        """
        Load one day dataset per file.

        Parameters
        ----------
        files
            Trajectory files, one per observation day.
        cfg
            Matching thresholds; defaults to ``MatcherConfig.driving()``.
        """
        self._setup(load_days(files), cfg)

    @classmethod
    def from_frames(cls, frames: Iterable[pd.DataFrame], cfg: Optional[MatcherConfig] = None) -> "CarrierEnv":
        """
        Build an engine from day datasets that are already loaded.

        The frames are copied; later changes by the caller do not reach the engine.
        """
        env = cls.__new__(cls)
        env._setup([f.copy() for f in frames], cfg)
        return env

    def _setup(self, days: list[pd.DataFrame], cfg: Optional[MatcherConfig]) -> None:
        self.cfg = cfg or MatcherConfig.driving()
        self.days = days
        self._cell_lock = threading.Lock()
        self._cell = self.cfg.default_cell
        self._prediction = SnapshotStore(empty_prediction())

    @property
    def current_cell(self) -> int:
        with self._cell_lock:
            return self._cell

    def update_cell(self, cell: int) -> None:
        """
        Record the cell currently serving the client.
        """
        with self._cell_lock:
            self._cell = cell

    def get_prediction(self) -> pd.DataFrame:
        """
        Copy of the latest prediction (empty before the first update).
        """
        return self._prediction.read()

    def update_location(self, lng: float, lat: float, time: float) -> None:
        """
        Recompute the prediction for the client's position at ``time``.

        Days without a usable match are skipped silently; seconds that no
        day covers come out as NaN.
        """
        logger.debug("update_location lng=%s lat=%s time=%s over %d days", lng, lat, time, len(self.days))
        pos = Position(lng, lat)
        cell = self.current_cell

        windows = []
        for i, df in enumerate(self.days):
            anchor = match_day(i, df, pos, cell, self.cfg)
            if anchor is None:
                continue
            window = extract_window(df, anchor, self.cfg.window_s)
            logger.debug("day %d: anchor t=%.1f (%.1f m), %d records in window", i, anchor.time, anchor.distance_m, len(window))
            windows.append(window)

        frame = combine(windows)
        logger.debug("combined frame: %d records from %d days", len(frame), len(windows))

        self._prediction.publish(aggregate(frame, time, self.cfg.window_s))
