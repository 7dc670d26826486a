"""Non-overlapping placement of fixed-radius circles around map markers."""

from .engine import PlacementConfig, find_position, overlaps, place_circles
from .models import MarkerPoint, PlacedCircle, PlacementInputError
from .overlays import GeoJSONCircleRenderer, OverlayLayer, PlacementPass

__all__ = [
    "GeoJSONCircleRenderer",
    "MarkerPoint",
    "OverlayLayer",
    "PlacedCircle",
    "PlacementConfig",
    "PlacementInputError",
    "PlacementPass",
    "find_position",
    "overlaps",
    "place_circles",
]
