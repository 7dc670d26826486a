from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from landiq.placement.engine import (
    DEFAULT_MAX_RINGS,
    DEFAULT_MIN_CLEARANCE_M,
    DEFAULT_RING_ANGLES,
    DEFAULT_RING_SPACING,
    PlacementConfig,
)


DEFAULT_DB_PATH = "./landiq.sqlite"
DEFAULT_CIRCLE_RADIUS_M = 150.0


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not str(raw).strip():
        return default
    try:
        return float(str(raw).strip())
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not str(raw).strip():
        return default
    try:
        return int(float(str(raw).strip()))
    except (ValueError, OverflowError):
        return default


@dataclass(frozen=True)
class Settings:
    """Process-wide settings read from the environment.

    Unparseable values fall back to defaults. Range checks happen when the
    values are turned into a `PlacementConfig`.
    """

    db_path: str
    circle_radius_m: float
    min_clearance_m: float
    ring_angles: int
    max_rings: int
    ring_spacing: float

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            db_path=os.getenv("LANDIQ_DB") or DEFAULT_DB_PATH,
            circle_radius_m=_env_float("LANDIQ_CIRCLE_RADIUS_M", DEFAULT_CIRCLE_RADIUS_M),
            min_clearance_m=_env_float("LANDIQ_MIN_CLEARANCE_M", DEFAULT_MIN_CLEARANCE_M),
            ring_angles=_env_int("LANDIQ_RING_ANGLES", DEFAULT_RING_ANGLES),
            max_rings=_env_int("LANDIQ_MAX_RINGS", DEFAULT_MAX_RINGS),
            ring_spacing=_env_float("LANDIQ_RING_SPACING", DEFAULT_RING_SPACING),
        )

    def placement_config(self, **overrides) -> PlacementConfig:
        values = {
            "min_clearance_m": self.min_clearance_m,
            "ring_angles": self.ring_angles,
            "max_rings": self.max_rings,
            "ring_spacing": self.ring_spacing,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return PlacementConfig(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def reset_settings_cache() -> None:
    """Test helper to force env re-read."""

    get_settings.cache_clear()
