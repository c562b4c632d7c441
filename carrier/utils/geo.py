# carrier/utils/geo.py

"""
Geospatial utility functions.
"""

from typing import Tuple

import numpy as np

EARTH_RADIUS_M = 6371.0 * 1000  # Earth radius in metres


def distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    """
    Equirectangular distance between two points, in metres.

    Latitude displacement is scaled by the Earth radius; longitude
    displacement is additionally scaled by cos(latitude of ``a``). The
    result is therefore only approximately symmetric, and only meaningful
    for displacements of up to a few tens of kilometres.

    Parameters
    ----------
    a
        (longitude, latitude) of point A, in decimal degrees. Either
        component may be a numpy array, in which case the distances of all
        those points to ``b`` are returned as an array.
    b
        (longitude, latitude) of point B, in decimal degrees.

    Returns
    -------
    float
        Distance between A and B in metres.
    """
    lng1, lat1 = a
    lng2, lat2 = b
    y = EARTH_RADIUS_M * np.radians(np.subtract(lat1, lat2))
    x = EARTH_RADIUS_M * np.cos(np.radians(lat1)) * np.radians(np.subtract(lng1, lng2))
    return np.hypot(x, y)
