from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from landiq.geo import haversine_m, offset_m

from .models import MarkerPoint, PlacedCircle, PlacementInputError, require_finite


logger = logging.getLogger("landiq.placement")


DEFAULT_MIN_CLEARANCE_M = 50.0
DEFAULT_RING_ANGLES = 8
DEFAULT_MAX_RINGS = 3
DEFAULT_RING_SPACING = 2.2


@dataclass(frozen=True)
class PlacementConfig:
    """Tunables for the ring search.

    Candidate ring `r` sits at `radius_m * ring_spacing * r` from the base
    position and is sampled at `ring_angles` equally spaced angles.
    """

    min_clearance_m: float = DEFAULT_MIN_CLEARANCE_M
    ring_angles: int = DEFAULT_RING_ANGLES
    max_rings: int = DEFAULT_MAX_RINGS
    ring_spacing: float = DEFAULT_RING_SPACING

    def __post_init__(self) -> None:
        clearance = require_finite("min_clearance_m", self.min_clearance_m)
        if clearance < 0:
            raise PlacementInputError(f"min_clearance_m must be >= 0, got {clearance}")
        spacing = require_finite("ring_spacing", self.ring_spacing)
        if spacing <= 0:
            raise PlacementInputError(f"ring_spacing must be > 0, got {spacing}")
        angles = _require_int("ring_angles", self.ring_angles, minimum=1)
        rings = _require_int("max_rings", self.max_rings, minimum=0)

        object.__setattr__(self, "min_clearance_m", clearance)
        object.__setattr__(self, "ring_spacing", spacing)
        object.__setattr__(self, "ring_angles", angles)
        object.__setattr__(self, "max_rings", rings)


def _require_int(name: str, value, *, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or int(value) != value:
        raise PlacementInputError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise PlacementInputError(f"{name} must be >= {minimum}, got {value}")
    return int(value)


def overlaps(
    lat: float,
    lng: float,
    radius_m: float,
    placed: Iterable[PlacedCircle],
    *,
    clearance_m: float = DEFAULT_MIN_CLEARANCE_M,
) -> bool:
    """True when the candidate circle comes closer than `clearance_m` to any placed circle.

    A distance exactly equal to the threshold is not an overlap.
    """

    for other in placed:
        threshold = radius_m + other.radius_m + clearance_m
        if haversine_m(lat, lng, other.lat, other.lng) < threshold:
            return True
    return False


def ring_candidates(marker: MarkerPoint, config: PlacementConfig):
    """Yield (ring, angle_deg, lat, lng) in search order.

    Angle 0 points east and angles grow counter-clockwise.
    """

    step = 360.0 / config.ring_angles
    for ring in range(1, config.max_rings + 1):
        distance = marker.radius_m * config.ring_spacing * ring
        for i in range(config.ring_angles):
            angle_deg = step * i
            theta = math.radians(angle_deg)
            lat, lng = offset_m(
                marker.lat,
                marker.lng,
                east_m=distance * math.cos(theta),
                north_m=distance * math.sin(theta),
            )
            yield ring, angle_deg, lat, lng


def find_position(
    marker: MarkerPoint,
    placed: Sequence[PlacedCircle],
    config: Optional[PlacementConfig] = None,
) -> PlacedCircle:
    """Pick a render position for `marker` that clears every circle in `placed`.

    Falls back to the base position (flagged `degraded`) when every ring
    candidate overlaps.
    """

    cfg = config or PlacementConfig()
    clearance = cfg.min_clearance_m

    if not overlaps(marker.lat, marker.lng, marker.radius_m, placed, clearance_m=clearance):
        return PlacedCircle(
            marker_id=marker.marker_id,
            lat=marker.lat,
            lng=marker.lng,
            radius_m=marker.radius_m,
            base_lat=marker.lat,
            base_lng=marker.lng,
        )

    for ring, angle_deg, lat, lng in ring_candidates(marker, cfg):
        if not overlaps(lat, lng, marker.radius_m, placed, clearance_m=clearance):
            return PlacedCircle(
                marker_id=marker.marker_id,
                lat=lat,
                lng=lng,
                radius_m=marker.radius_m,
                base_lat=marker.lat,
                base_lng=marker.lng,
                ring=ring,
                angle_deg=angle_deg,
            )

    logger.warning(
        "no clear position for marker %r after %s rings x %s angles; keeping base position",
        marker.marker_id,
        cfg.max_rings,
        cfg.ring_angles,
    )
    return PlacedCircle(
        marker_id=marker.marker_id,
        lat=marker.lat,
        lng=marker.lng,
        radius_m=marker.radius_m,
        base_lat=marker.lat,
        base_lng=marker.lng,
        degraded=True,
    )


def place_circles(
    markers: Iterable[MarkerPoint],
    config: Optional[PlacementConfig] = None,
) -> List[PlacedCircle]:
    """Place every marker in input order; earlier markers keep their spot."""

    cfg = config or PlacementConfig()
    items = list(markers)
    for m in items:
        if not isinstance(m, MarkerPoint):
            raise PlacementInputError(f"expected MarkerPoint, got {type(m).__name__}")

    placed: List[PlacedCircle] = []
    for marker in items:
        placed.append(find_position(marker, placed, cfg))

    logger.debug(
        "placed %s circles (%s displaced, %s degraded)",
        len(placed),
        sum(1 for c in placed if c.ring > 0),
        sum(1 for c in placed if c.degraded),
    )
    return placed
