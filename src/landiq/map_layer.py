from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from landiq.placement import (
    GeoJSONCircleRenderer,
    MarkerPoint,
    OverlayLayer,
    PlacedCircle,
    PlacementConfig,
    place_circles,
)
from landiq.properties.models import SavedProperty
from landiq.properties.style import marker_style


def property_markers(properties: Iterable[SavedProperty], radius_m: float) -> List[MarkerPoint]:
    return [
        MarkerPoint(lat=p.lat, lng=p.lng, radius_m=radius_m, marker_id=p.id)
        for p in properties
        if p.lat is not None and p.lng is not None
    ]


def _point_feature(prop: SavedProperty) -> Dict[str, Any]:
    return {
        "type": "Feature",
        "id": f"marker:{prop.id}",
        "geometry": {"type": "Point", "coordinates": [float(prop.lng), float(prop.lat)]},
        "properties": {
            "kind": "marker",
            "marker_id": prop.id,
            "address": prop.address,
            "permit_type": prop.permit_type,
            "risk_level": prop.risk_level,
            "estimated_days": prop.estimated_days,
            "confidence": prop.confidence,
            **marker_style(prop.permit_type, prop.risk_level),
        },
    }


def build_overlay_collection(
    properties: Iterable[SavedProperty],
    *,
    radius_m: float,
    config: Optional[PlacementConfig] = None,
) -> Dict[str, Any]:
    """Marker points plus non-overlapping risk circles as one FeatureCollection.

    Circles are placed in the order `properties` are given, so the first
    property always keeps its circle on its true location.
    """

    props = [p for p in properties if p.lat is not None and p.lng is not None]
    by_id = {p.id: p for p in props}

    def _circle_props(circle: PlacedCircle) -> Dict[str, Any]:
        prop = by_id.get(circle.marker_id)
        if prop is None:
            return {}
        return {
            "address": prop.address,
            "risk_level": prop.risk_level,
            **marker_style(prop.permit_type, prop.risk_level),
        }

    placements = place_circles(property_markers(props, radius_m), config)
    layer = OverlayLayer(GeoJSONCircleRenderer(_circle_props))
    handles = layer.redraw(placements)

    features: List[Dict[str, Any]] = [_point_feature(p) for p in props]
    features.extend(handles[c.marker_id] for c in placements if c.marker_id in handles)
    return {
        "type": "FeatureCollection",
        "features": features,
        "placements": [c.to_dict() for c in placements],
    }
