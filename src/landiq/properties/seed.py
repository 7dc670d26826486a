"""Sample Bay Area properties for demos and local development."""

from __future__ import annotations

import random
from typing import List, Optional

from .models import PermitPrediction, SavedProperty
from .predict import mock_geocode
from .storage import PropertyStore


# (address, estimated_days, permit_type, confidence, risk_level, search_date)
SAMPLE_PROPERTIES = [
    ("123 Main Street, San Francisco, CA 94105", 30, "residential", 92, "low", "2024-05-10"),
    ("456 Market Avenue, San Francisco, CA 94103", 45, "residential", 85, "medium", "2024-05-12"),
    ("789 Mission Street, San Francisco, CA 94107", 60, "commercial", 78, "medium", "2024-05-14"),
    ("101 Valencia Boulevard, San Francisco, CA 94110", 25, "residential", 95, "low", "2024-05-15"),
    ("222 Howard Street, San Francisco, CA 94105", 75, "commercial", 70, "high", "2024-05-16"),
    ("333 Folsom Street, San Francisco, CA 94105", 40, "residential", 88, "low", "2024-05-17"),
    ("444 Harrison Street, San Francisco, CA 94107", 55, "commercial", 82, "medium", "2024-05-18"),
    ("555 Bryant Street, San Francisco, CA 94107", 35, "residential", 90, "low", "2024-05-19"),
    ("666 Brannan Street, San Francisco, CA 94107", 65, "commercial", 75, "high", "2024-05-20"),
    ("777 Townsend Street, San Francisco, CA 94107", 50, "residential", 86, "medium", "2024-05-21"),
    ("1234 Lombard Street, San Francisco, CA 94123", 42, "residential", 89, "low", "2024-05-22"),
    ("890 Geary Boulevard, San Francisco, CA 94109", 58, "commercial", 76, "medium", "2024-05-22"),
    ("2100 Van Ness Avenue, San Francisco, CA 94109", 70, "commercial", 72, "high", "2024-05-23"),
    ("450 Sutter Street, San Francisco, CA 94108", 38, "commercial", 91, "low", "2024-05-23"),
    ("1001 California Street, San Francisco, CA 94108", 45, "residential", 87, "medium", "2024-05-24"),
    ("350 Frank H Ogawa Plaza, Oakland, CA 94612", 52, "commercial", 83, "medium", "2024-05-24"),
    ("1200 Broadway, Oakland, CA 94612", 48, "commercial", 85, "medium", "2024-05-25"),
    ("3300 Telegraph Avenue, Oakland, CA 94609", 32, "residential", 93, "low", "2024-05-25"),
    ("4800 Shattuck Avenue, Oakland, CA 94609", 28, "residential", 94, "low", "2024-05-26"),
    ("2201 Broadway, Oakland, CA 94612", 65, "commercial", 77, "high", "2024-05-26"),
    ("2121 Allston Way, Berkeley, CA 94704", 40, "commercial", 88, "low", "2024-05-27"),
    ("2299 Piedmont Avenue, Berkeley, CA 94720", 55, "commercial", 81, "medium", "2024-05-27"),
    ("1885 University Avenue, Berkeley, CA 94703", 35, "residential", 90, "low", "2024-05-28"),
    ("150 S 2nd Street, San Jose, CA 95113", 62, "commercial", 79, "medium", "2024-05-28"),
    ("1 Paseo de San Antonio, San Jose, CA 95113", 70, "commercial", 73, "high", "2024-05-29"),
    ("1401 N 1st Street, San Jose, CA 95112", 45, "commercial", 86, "medium", "2024-05-29"),
    ("1035 Coleman Avenue, San Jose, CA 95110", 38, "residential", 89, "low", "2024-05-30"),
    ("555 University Avenue, Palo Alto, CA 94301", 42, "commercial", 87, "medium", "2024-05-30"),
    ("2600 El Camino Real, Palo Alto, CA 94306", 50, "commercial", 84, "medium", "2024-05-31"),
    ("101 Lytton Avenue, Palo Alto, CA 94301", 35, "residential", 91, "low", "2024-05-31"),
]


def sample_predictions(rng: Optional[random.Random] = None) -> List[PermitPrediction]:
    out: List[PermitPrediction] = []
    for address, days, permit_type, confidence, risk, search_date in SAMPLE_PROPERTIES:
        lat, lng = mock_geocode(address, rng)
        out.append(
            PermitPrediction(
                address=address,
                estimated_days=days,
                permit_type=permit_type,
                confidence=confidence,
                risk_level=risk,
                search_date=search_date,
                lat=lat,
                lng=lng,
            )
        )
    return out


def seed_properties(
    store: PropertyStore, rng: Optional[random.Random] = None
) -> List[SavedProperty]:
    return [store.save(p) for p in sample_predictions(rng)]
