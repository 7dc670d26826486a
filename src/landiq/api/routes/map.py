from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from landiq.api.deps import open_store
from landiq.geo import GeoInputError, validate_distance
from landiq.map_layer import build_overlay_collection
from landiq.placement import MarkerPoint, PlacementInputError, place_circles
from landiq.settings import get_settings

router = APIRouter(tags=["map"])


class MarkerBody(BaseModel):
    lat: float
    lng: float
    radius_m: float
    marker_id: str = ""


class PlacementOverrides(BaseModel):
    min_clearance_m: Optional[float] = None
    ring_angles: Optional[int] = None
    max_rings: Optional[int] = None
    ring_spacing: Optional[float] = None


class PlaceBody(BaseModel):
    markers: List[MarkerBody] = Field(default_factory=list)
    config: PlacementOverrides = Field(default_factory=PlacementOverrides)


@router.get("/map/overlays")
def map_overlays(
    radius_m: Optional[float] = None,
    clearance_m: Optional[float] = None,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    settings = get_settings()
    try:
        config = settings.placement_config(min_clearance_m=clearance_m)
        radius = validate_distance(
            "radius_m", settings.circle_radius_m if radius_m is None else radius_m
        )
        store = open_store()
        try:
            properties = store.list_recent(limit=limit)
        finally:
            store.close()
        return build_overlay_collection(properties, radius_m=radius, config=config)
    except GeoInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/map/place")
def place(body: PlaceBody) -> Dict[str, Any]:
    settings = get_settings()
    try:
        config = settings.placement_config(**body.config.model_dump())
        markers = [MarkerPoint(**m.model_dump()) for m in body.markers]
    except PlacementInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    placed = place_circles(markers, config)
    return {
        "ok": True,
        "placements": [c.to_dict() for c in placed],
        "degraded": sum(1 for c in placed if c.degraded),
    }
