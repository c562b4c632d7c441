"""
Shared fixtures: small in-memory day datasets.
"""

import pandas as pd
import pytest

from carrier.analysis.types import DAY_COLUMNS


def _make_day(records):
    """Build a day dataset from partial records; missing fields default to 0."""
    rows = []
    for i, rec in enumerate(records):
        row = dict.fromkeys(DAY_COLUMNS, 0.0)
        row["index"] = float(i)
        row.update(rec)
        rows.append(row)
    return pd.DataFrame(rows, columns=DAY_COLUMNS, dtype=float)


@pytest.fixture
def make_day():
    """Factory fixture for day datasets."""
    return _make_day


@pytest.fixture
def two_days():
    """Two days passing through (10.0, 20.0) on cell 5."""
    day1 = _make_day([
        {"lng": 10.0, "lat": 20.0, "time": 100, "cell": 5, "throughput": 50, "rtt": 0.04},
        {"lng": 10.0001, "lat": 20.0001, "time": 101, "cell": 5, "throughput": 70, "rtt": 0.06},
    ])
    day2 = _make_day([
        {"lng": 10.0005, "lat": 20.0004, "time": 200, "cell": 5, "throughput": 90, "rtt": 0.02},
        {"lng": 10.0006, "lat": 20.0005, "time": 201, "cell": 5, "throughput": 110, "rtt": 0.04},
    ])
    return [day1, day2]
