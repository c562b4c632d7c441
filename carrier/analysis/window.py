"""
Extract the forward window of a day dataset following its anchor.
"""

from __future__ import annotations

import pandas as pd

from carrier.analysis.types import Anchor, TIME, DAY


def extract_window(df: pd.DataFrame, anchor: Anchor, length_s: float) -> pd.DataFrame:
    """
    Slice ``[anchor.time, anchor.time + length_s)`` out of a day dataset.

    The returned frame is a copy: its time column is rebased so that the
    anchor sits at 0, and a constant ``day`` column records its origin.
    It is empty when the day has no record in the interval.
    """
    t0 = anchor.time
    window = df[(df[TIME] >= t0) & (df[TIME] < t0 + length_s)].copy()
    window[TIME] = window[TIME] - t0
    window[DAY] = anchor.day
    return window
