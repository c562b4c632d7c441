"""
Aggregate the combined match windows of all days into a prediction.

For every forward second the metrics of all matched records are averaged;
the handover indicator is first reduced to 0/1 so that its average is a
handover probability.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np
import pandas as pd

from carrier.analysis.types import (
    DAY_COLUMNS, DAY, TIME, HANDOVER, METRICS, PREDICTION_COLUMNS,
)
from carrier.utils.log import get_logger

logger = get_logger(__name__)


def empty_prediction() -> pd.DataFrame:
    """
    Prediction frame with no rows.
    """
    return pd.DataFrame(columns=PREDICTION_COLUMNS, dtype=float)


def combine(windows: Iterable[pd.DataFrame]) -> pd.DataFrame:
    """
    Row-wise union of the per-day match windows.

    Empty windows are dropped; with nothing left the result is an empty
    frame carrying the day schema plus the ``day`` column.
    """
    frames = [w for w in windows if not w.empty]
    if not frames:
        return pd.DataFrame(columns=DAY_COLUMNS + [DAY], dtype=float)
    return pd.concat(frames, ignore_index=True)


def second_of(rebased: pd.Series) -> pd.Series:
    """
    Round rebased times to the nearest whole second, halves away from zero.
    """
    x = rebased.astype(float).abs()
    # compare the fractional part directly; floor(x + 0.5) misrounds just below .5
    rounded = np.where(x - np.floor(x) >= 0.5, np.ceil(x), np.floor(x))
    return pd.Series(np.sign(rebased.astype(float)) * rounded, index=rebased.index)


def aggregate(frame: pd.DataFrame, time: float, length_s: int) -> pd.DataFrame:
    """
    Build the per-second prediction table from the combined frame.

    Parameters
    ----------
    frame
        Union of every day's match window (rebased times).
    time
        Absolute time of the request; row ``t`` is stamped ``time + t``.
    length_s
        Number of forward seconds to predict.

    Returns
    -------
    pd.DataFrame
        ``length_s`` rows with columns time, throughput, rtt, loss and
        handover. A metric is NaN for a second that no day covers.
    """
    seconds = second_of(frame[TIME])
    rows = []
    for t in range(length_s):
        sel = frame[seconds == t]
        row = {TIME: time + t}
        for label in METRICS:
            values = sel[label].astype(float)
            if label == HANDOVER:
                # any nonzero handover count (after truncation) counts as one handover
                values = (np.trunc(values) != 0).astype(float)
            row[label] = values.mean() if len(values) else np.nan
        rows.append(row)

    logger.debug("aggregated %d records into %d seconds", len(frame), length_s)
    return pd.DataFrame(rows, columns=PREDICTION_COLUMNS)
