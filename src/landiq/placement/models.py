from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from landiq import geo
from landiq.geo import GeoInputError, haversine_m, validate_coordinate, validate_distance


class PlacementInputError(GeoInputError):
    """Malformed marker or placement parameters."""


@dataclass(frozen=True)
class MarkerPoint:
    """A point of interest that wants a circular overlay of `radius_m`."""

    lat: float
    lng: float
    radius_m: float
    marker_id: str = ""

    def __post_init__(self) -> None:
        try:
            lat, lng = validate_coordinate(self.lat, self.lng)
            radius = validate_distance("radius_m", self.radius_m)
        except GeoInputError as exc:
            raise PlacementInputError(f"marker {self.marker_id!r}: {exc}") from None
        object.__setattr__(self, "lat", lat)
        object.__setattr__(self, "lng", lng)
        object.__setattr__(self, "radius_m", radius)
        object.__setattr__(self, "marker_id", str(self.marker_id))

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "MarkerPoint":
        if not isinstance(raw, dict):
            raise PlacementInputError(f"marker must be an object, got {type(raw).__name__}")
        lat = raw.get("lat", raw.get("latitude"))
        lng = raw.get("lng", raw.get("lon", raw.get("longitude")))
        radius = raw.get("radius_m", raw.get("radius"))
        if lat is None or lng is None or radius is None:
            raise PlacementInputError("marker requires lat, lng and radius_m")
        return cls(
            lat=lat,
            lng=lng,
            radius_m=radius,
            marker_id=str(raw.get("marker_id", raw.get("id", "")) or ""),
        )


@dataclass(frozen=True)
class PlacedCircle:
    marker_id: str
    lat: float
    lng: float
    radius_m: float
    base_lat: float
    base_lng: float

    # 0 means the base position was kept.
    ring: int = 0
    angle_deg: Optional[float] = None
    degraded: bool = False

    @property
    def displaced(self) -> bool:
        return self.lat != self.base_lat or self.lng != self.base_lng

    def displacement_m(self) -> float:
        if not self.displaced:
            return 0.0
        return haversine_m(self.base_lat, self.base_lng, self.lat, self.lng)

    def distance_to(self, other: "PlacedCircle") -> float:
        return haversine_m(self.lat, self.lng, other.lat, other.lng)

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["displacement_m"] = round(self.displacement_m(), 3)
        return payload


def require_finite(name: str, value: float) -> float:
    try:
        return geo.require_finite(name, value)
    except GeoInputError as exc:
        raise PlacementInputError(str(exc)) from None
