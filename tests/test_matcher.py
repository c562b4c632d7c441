"""
Unit tests for per-day matching.
"""

import numpy as np
import pytest

from carrier.analysis.config import MatcherConfig
from carrier.analysis.matcher import find_nearest, match_day, within_box
from carrier.analysis.types import Position
from carrier.utils.geo import distance

# metres per degree of latitude
M_PER_DEG = 111_194.93


def test_box_filter_is_strict(make_day):
    """Records exactly on the box edge are outside it."""
    df = make_day([
        {"lng": 10.25, "lat": 19.75, "time": 1},
        {"lng": 10.75, "lat": 20.0, "time": 2},
        {"lng": 10.0, "lat": 20.5, "time": 3},
        {"lng": 9.5, "lat": 20.0, "time": 4},
    ])
    block = within_box(df, Position(10.0, 20.0), 0.5)
    assert list(block["time"]) == [1]


def test_nearest_returns_identical_point(make_day):
    """A candidate equal to the query point is the nearest one."""
    df = make_day([
        {"lng": 10.002, "lat": 20.0, "time": 1},
        {"lng": 10.0, "lat": 20.0, "time": 2},
        {"lng": 10.0, "lat": 20.001, "time": 3},
    ])
    record, dist = find_nearest(Position(10.0, 20.0), df)
    assert record["time"] == 2
    assert dist == 0


def test_nearest_tie_keeps_first(make_day):
    """Equally distant candidates resolve to the first in frame order."""
    df = make_day([
        {"lng": 10.0, "lat": 20.001, "time": 7},
        {"lng": 10.0, "lat": 20.001, "time": 8},
    ])
    record, _ = find_nearest(Position(10.0, 20.0), df)
    assert record["time"] == 7


def test_gate_rejects_far_record(make_day):
    """A nearest record 150 m away does not match."""
    df = make_day([{"lng": 10.0, "lat": 20.0 + 150 / M_PER_DEG, "time": 5, "cell": 3}])
    assert match_day(0, df, Position(10.0, 20.0), 3, MatcherConfig()) is None


def test_gate_rejects_other_cell(make_day):
    """A nearest record 50 m away on another cell does not match."""
    df = make_day([{"lng": 10.0, "lat": 20.0 + 50 / M_PER_DEG, "time": 5, "cell": 4}])
    assert match_day(0, df, Position(10.0, 20.0), 3, MatcherConfig()) is None


def test_gate_accepts_close_record_on_same_cell(make_day):
    """A nearest record 50 m away on the current cell becomes the anchor."""
    df = make_day([
        {"lng": 10.0, "lat": 20.0 + 50 / M_PER_DEG, "time": 5, "cell": 3},
        {"lng": 10.0, "lat": 20.0 + 500 / M_PER_DEG, "time": 9, "cell": 3},
    ])
    anchor = match_day(2, df, Position(10.0, 20.0), 3, MatcherConfig())
    assert anchor is not None
    assert anchor.day == 2
    assert anchor.time == 5
    assert anchor.distance_m == pytest.approx(50, rel=1e-3)


def test_gate_boundary_is_inclusive(make_day):
    """A record exactly at the threshold distance matches; one ulp closer threshold rejects it."""
    df = make_day([{"lng": 10.0, "lat": 20.0009, "time": 5, "cell": 3}])
    pos = Position(10.0, 20.0)
    _, exact = find_nearest(pos, df)
    assert exact == pytest.approx(float(distance((10.0, 20.0009), (10.0, 20.0))))

    anchor = match_day(0, df, pos, 3, MatcherConfig(same_location_m=exact))
    assert anchor is not None
    assert anchor.time == 5

    below = float(np.nextafter(exact, 0.0))
    assert match_day(0, df, pos, 3, MatcherConfig(same_location_m=below)) is None


def test_gate_uses_nearest_only(make_day):
    """A farther record on the right cell does not rescue a wrong-cell nearest record."""
    df = make_day([
        {"lng": 10.0, "lat": 20.0 + 10 / M_PER_DEG, "time": 5, "cell": 4},
        {"lng": 10.0, "lat": 20.0 + 60 / M_PER_DEG, "time": 6, "cell": 3},
    ])
    assert match_day(0, df, Position(10.0, 20.0), 3, MatcherConfig()) is None


def test_no_candidate_in_box(make_day):
    """A day far from the query contributes nothing."""
    df = make_day([{"lng": 11.0, "lat": 21.0, "time": 5, "cell": 3}])
    assert match_day(0, df, Position(10.0, 20.0), 3, MatcherConfig()) is None


def test_pedestrian_preset_is_tighter(make_day):
    """The walking preset rejects a record the driving preset accepts."""
    df = make_day([{"lng": 10.0, "lat": 20.0 + 50 / M_PER_DEG, "time": 5, "cell": 3}])
    pos = Position(10.0, 20.0)
    assert match_day(0, df, pos, 3, MatcherConfig.driving()) is not None
    assert match_day(0, df, pos, 3, MatcherConfig.pedestrian()) is None
