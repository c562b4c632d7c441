"""
Match the current position against one day of recorded trajectory.

Per day:
- coarse bounding-box filter around the query position
- nearest record by equirectangular distance (first one wins on ties)
- validity gate: same location (distance threshold) and same serving cell
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd

from carrier.analysis.config import MatcherConfig
from carrier.analysis.types import Anchor, Position, LNG, LAT, TIME, CELL
from carrier.utils.geo import distance
from carrier.utils.log import get_logger

logger = get_logger(__name__)


def within_box(df: pd.DataFrame, pos: Position, half_width_deg: float) -> pd.DataFrame:
    """
    Rows whose longitude and latitude both lie strictly within
    ``half_width_deg`` degrees of ``pos``.
    """
    mask = ((df[LNG] - pos.lng).abs() < half_width_deg) & ((df[LAT] - pos.lat).abs() < half_width_deg)
    return df[mask]


def find_nearest(pos: Position, df: pd.DataFrame) -> tuple[pd.Series, float]:
    """
    Find the record of ``df`` closest to ``pos``.

    Parameters
    ----------
    pos
        Query position.
    df
        Non-empty candidate frame.

    Returns
    -------
    (record, distance_m)
        The nearest row and its distance to ``pos`` in metres. When several
        rows are equally close, the first one in frame order is returned.
    """
    dists = distance((df[LNG].to_numpy(), df[LAT].to_numpy()), pos)
    i = int(np.argmin(dists))
    return df.iloc[i], float(dists[i])


def match_day(
    day: int,
    df: pd.DataFrame,
    pos: Position,
    cell: int,
    cfg: MatcherConfig,
) -> Optional[Anchor]:
    """
    Locate the anchor record of one day dataset.

    Returns
    -------
    Optional[Anchor]
        The anchor, or None when the day has no record near ``pos``, or its
        nearest record is too far away or on another cell.
    """
    block = within_box(df, pos, cfg.bbox_deg)
    if block.empty:
        logger.debug("day %d: no record within %.2f deg", day, cfg.bbox_deg)
        return None

    record, dist = find_nearest(pos, block)
    if dist > cfg.same_location_m:
        logger.debug("day %d: nearest record %.1f m away", day, dist)
        return None
    if record[CELL] != cell:
        logger.debug("day %d: nearest record on cell %s, current cell %s", day, record[CELL], cell)
        return None

    return Anchor(day=day, time=float(record[TIME]), distance_m=dist)
