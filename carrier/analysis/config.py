# carrier/analysis/config.py

from dataclasses import dataclass

@dataclass
class MatcherConfig:
    """
    Configuration for the match → extract → aggregate pipeline.

    Attributes
    ----------
    bbox_deg
        Half-width (degrees) of the coarse bounding box around the query.
    same_location_m
        Maximum distance (m) at which a day's nearest record still counts
        as the same location.
    window_s
        Length (s) of the forward window extracted after each anchor; also
        the number of rows in a prediction.
    default_cell
        Serving cell assumed until a driver reports one.
    """
    bbox_deg:         float   = 0.2
    same_location_m:  float   = 100.0
    window_s:         int     = 5
    default_cell:     int     = 0

    @classmethod
    def driving(cls):
        """Preset for vehicle mode (default thresholds)."""
        return cls()

    @classmethod
    def pedestrian(cls):
        """Preset for walking traces (tighter location matching)."""
        return cls(
            bbox_deg=0.05,
            same_location_m=30.0,
            window_s=5,
            default_cell=0,
        )
