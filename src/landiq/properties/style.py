from __future__ import annotations

from typing import Any, Dict


RESIDENTIAL_COLOR = "#7c3aed"
COMMERCIAL_COLOR = "#3b82f6"

RISK_OPACITY: Dict[str, float] = {
    "low": 0.7,
    "medium": 0.85,
    "high": 1.0,
}


def marker_style(permit_type: str, risk_level: str) -> Dict[str, Any]:
    fill = RESIDENTIAL_COLOR if permit_type == "residential" else COMMERCIAL_COLOR
    return {
        "fill_color": fill,
        "fill_opacity": RISK_OPACITY.get(risk_level, 1.0),
        "stroke_color": "#ffffff",
        "stroke_weight": 2,
    }
