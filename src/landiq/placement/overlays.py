from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Protocol

from landiq.geo import circle_ring

from .models import PlacedCircle


logger = logging.getLogger("landiq.placement")


class OverlayRenderer(Protocol):
    """Draws a placed circle and later tears the drawing down."""

    def draw(self, circle: PlacedCircle) -> Any: ...

    def remove(self, handle: Any) -> None: ...


class OverlayLayer:
    """Owns the rendered overlay handles for one map, keyed by marker id.

    Every redraw clears all handles first; handles are never patched in place.
    """

    def __init__(self, renderer: OverlayRenderer) -> None:
        self.renderer = renderer
        self._handles: Dict[str, Any] = {}

    def clear(self) -> None:
        handles, self._handles = self._handles, {}
        for handle in handles.values():
            self.renderer.remove(handle)

    def redraw(self, placements: Iterable[PlacedCircle]) -> Dict[str, Any]:
        self.clear()
        for circle in placements:
            if circle.marker_id in self._handles:
                # Duplicate ids would orphan a handle; drop the older drawing.
                self.renderer.remove(self._handles.pop(circle.marker_id))
            self._handles[circle.marker_id] = self.renderer.draw(circle)
        return self.handles()

    def handles(self) -> Dict[str, Any]:
        return dict(self._handles)

    def __len__(self) -> int:
        return len(self._handles)


class PlacementPass:
    """Last-write-wins gate between placement computations and a layer.

    A result is only applied when its token is the newest one handed out by
    `begin()`; results of superseded passes are discarded whole.
    """

    def __init__(self, layer: OverlayLayer) -> None:
        self.layer = layer
        self._generation = 0
        self._applied: Optional[int] = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def applied_generation(self) -> Optional[int]:
        return self._applied

    def begin(self) -> int:
        self._generation += 1
        return self._generation

    def commit(self, token: int, placements: Iterable[PlacedCircle]) -> bool:
        if token != self._generation:
            logger.debug(
                "dropping stale placement pass %s (latest is %s)", token, self._generation
            )
            return False
        self.layer.redraw(placements)
        self._applied = token
        return True


class GeoJSONCircleRenderer:
    """Renders placed circles as GeoJSON Polygon features.

    `properties_for` can attach per-marker properties (styling, address, ...).
    """

    def __init__(
        self,
        properties_for: Optional[Callable[[PlacedCircle], Mapping[str, Any]]] = None,
        *,
        steps: int = 36,
    ) -> None:
        self.properties_for = properties_for
        self.steps = steps
        self.drawn: Dict[int, Dict[str, Any]] = {}

    def draw(self, circle: PlacedCircle) -> Dict[str, Any]:
        properties: Dict[str, Any] = {
            "kind": "circle",
            "marker_id": circle.marker_id,
            "radius_m": float(circle.radius_m),
            "ring": int(circle.ring),
            "angle_deg": circle.angle_deg,
            "degraded": bool(circle.degraded),
            "displacement_m": round(circle.displacement_m(), 3),
        }
        if self.properties_for is not None:
            properties.update(self.properties_for(circle) or {})
        feature = {
            "type": "Feature",
            "id": f"circle:{circle.marker_id}",
            "geometry": {
                "type": "Polygon",
                "coordinates": [
                    circle_ring(circle.lat, circle.lng, circle.radius_m, steps=self.steps)
                ],
            },
            "properties": properties,
        }
        self.drawn[id(feature)] = feature
        return feature

    def remove(self, handle: Dict[str, Any]) -> None:
        self.drawn.pop(id(handle), None)

    def features(self) -> list:
        return list(self.drawn.values())
