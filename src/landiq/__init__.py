"""Package initializer for `landiq`."""

from .placement import MarkerPoint, PlacedCircle, PlacementConfig, place_circles

__all__ = ["MarkerPoint", "PlacedCircle", "PlacementConfig", "place_circles"]
