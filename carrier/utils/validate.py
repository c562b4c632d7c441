"""
Pydantic schemas for the HTTP and replay drivers.
"""

import math
from typing import Optional

import pandas as pd
from pydantic import BaseModel


class CellUpdate(BaseModel):
    """
    Serving cell reported by the client.
    """
    cell: int

class LocationUpdate(BaseModel):
    """
    Client position at a given time.
    """
    lng: float
    lat: float
    time: float

class PredictionRow(BaseModel):
    """
    Predicted metrics for one forward second; None where no day had data.
    """
    time: float
    throughput: Optional[float]
    rtt: Optional[float]
    loss: Optional[float]
    handover: Optional[float]

class TracePoint(BaseModel):
    """
    One step of a replay trace.
    """
    time: float
    lng: float
    lat: float
    cell: int


def prediction_rows(df: pd.DataFrame) -> list[PredictionRow]:
    """
    Convert a prediction frame to wire rows, mapping NaN to None.
    """
    rows = []
    for rec in df.to_dict(orient="records"):
        rows.append(PredictionRow(**{
            k: None if isinstance(v, float) and math.isnan(v) else v
            for k, v in rec.items()
        }))
    return rows
