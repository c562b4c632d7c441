# carrier/analysis/types.py

from __future__ import annotations

from dataclasses import dataclass
from typing import List, NamedTuple

# -----------------------------------------------------------------------------
# Column labels shared by every day dataset and the prediction snapshot
INDEX      = "index"
LNG        = "lng"
LAT        = "lat"
SPEED      = "speed"
THROUGHPUT = "throughput"   # bytes per second
RTT        = "rtt"          # seconds
LOSS       = "loss"         # fraction, 0..1
RSRP       = "rsrp"
TIME       = "time"         # seconds, day-relative
HANDOVER   = "handover"
CELL       = "cell"
DAY        = "day"
# -----------------------------------------------------------------------------

DAY_COLUMNS: List[str] = [
    INDEX, LNG, LAT, SPEED, THROUGHPUT, RTT, LOSS, RSRP, TIME, HANDOVER, CELL,
]
METRICS: List[str] = [THROUGHPUT, RTT, LOSS, HANDOVER]
PREDICTION_COLUMNS: List[str] = [TIME] + METRICS


class Position(NamedTuple):
    """
    Point on the Earth's surface.

    Parameters
    ----------
    lng : float
        Longitude in decimal degrees.
    lat : float
        Latitude in decimal degrees.
    """
    lng: float
    lat: float


@dataclass
class Anchor:
    """
    Record of a day dataset judged to match the current position.

    Parameters
    ----------
    day : int
        Index of the day dataset the record belongs to.
    time : float
        Day-relative time of the record, in seconds.
    distance_m : float
        Distance between the record and the query position, in metres.
    """
    day: int
    time: float
    distance_m: float
