from __future__ import annotations

import math
from typing import List, Tuple


EARTH_RADIUS_M = 6_371_000.0


class GeoInputError(ValueError):
    """Raised when a coordinate or distance is outside its valid range."""


def require_finite(name: str, value: float) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise GeoInputError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(v):
        raise GeoInputError(f"{name} must be finite, got {value!r}")
    return v


def validate_coordinate(lat: float, lng: float) -> Tuple[float, float]:
    lat_v = require_finite("latitude", lat)
    lng_v = require_finite("longitude", lng)
    if not -90.0 <= lat_v <= 90.0:
        raise GeoInputError(f"latitude must be within [-90, 90], got {lat_v}")
    if not -180.0 <= lng_v <= 180.0:
        raise GeoInputError(f"longitude must be within [-180, 180], got {lng_v}")
    return lat_v, lng_v


def validate_distance(name: str, meters: float) -> float:
    v = require_finite(name, meters)
    if v < 0:
        raise GeoInputError(f"{name} must be >= 0, got {v}")
    return v


def haversine_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in meters between two lat/lng points."""

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)

    a = (
        math.sin(dphi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    )
    # Rounding can push `a` a hair outside [0, 1] for antipodal points.
    a = min(1.0, max(0.0, a))
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(a))


def _normalize_lng(lng: float) -> float:
    if -180.0 <= lng <= 180.0:
        return lng
    return ((lng + 180.0) % 360.0) - 180.0


def offset_m(lat: float, lng: float, *, east_m: float, north_m: float) -> Tuple[float, float]:
    """Shift a point by a metric east/north offset.

    Longitude degrees shrink with latitude, so the east offset is scaled by
    1 / cos(lat). Near the poles the scale factor is capped.
    """

    dlat = math.degrees(north_m / EARTH_RADIUS_M)
    cos_lat = math.cos(math.radians(lat))
    dlng = math.degrees(east_m / (EARTH_RADIUS_M * max(cos_lat, 1e-6)))

    new_lat = min(90.0, max(-90.0, lat + dlat))
    return new_lat, _normalize_lng(lng + dlng)


def circle_ring(
    lat: float, lng: float, radius_m: float, *, steps: int = 36
) -> List[List[float]]:
    """Closed GeoJSON ring ([lng, lat] pairs) approximating a circle."""

    steps = max(int(steps), 12)
    ring: List[List[float]] = []
    for i in range(steps):
        a = 2.0 * math.pi * (i / steps)
        p_lat, p_lng = offset_m(
            lat, lng, east_m=radius_m * math.cos(a), north_m=radius_m * math.sin(a)
        )
        ring.append([float(p_lng), float(p_lat)])
    if ring:
        ring.append(ring[0])
    return ring
