"""Mocked geocoding and permit prediction.

There is no geocoder and no model behind LandIQ yet: coordinates are jittered
around downtown San Francisco and the prediction is a fixed set of values.
"""

from __future__ import annotations

import random
from datetime import date
from typing import Optional, Tuple

from .models import PermitPrediction


DEFAULT_CENTER: Tuple[float, float] = (37.7749, -122.4194)
JITTER_DEGREES = 0.05

PREDICTED_DAYS = 45
PREDICTED_PERMIT_TYPE = "residential"
PREDICTED_CONFIDENCE = 85
PREDICTED_RISK = "low"


def mock_geocode(
    address: str,
    rng: Optional[random.Random] = None,
    *,
    center: Tuple[float, float] = DEFAULT_CENTER,
) -> Tuple[float, float]:
    r = rng or random
    lat = center[0] + (r.random() - 0.5) * JITTER_DEGREES
    lng = center[1] + (r.random() - 0.5) * JITTER_DEGREES
    return lat, lng


def predict_permit(
    address: str,
    *,
    rng: Optional[random.Random] = None,
    today: Optional[date] = None,
) -> PermitPrediction:
    cleaned = (address or "").strip()
    if not cleaned:
        raise ValueError("address is required")
    lat, lng = mock_geocode(cleaned, rng)
    return PermitPrediction(
        address=cleaned,
        estimated_days=PREDICTED_DAYS,
        permit_type=PREDICTED_PERMIT_TYPE,
        confidence=PREDICTED_CONFIDENCE,
        risk_level=PREDICTED_RISK,
        search_date=(today or date.today()).isoformat(),
        lat=lat,
        lng=lng,
    )
