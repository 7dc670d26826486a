from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


PermitType = Literal["residential", "commercial"]
RiskLevel = Literal["low", "medium", "high"]


class PermitPrediction(BaseModel):
    address: str
    estimated_days: int
    permit_type: PermitType
    confidence: int = Field(ge=0, le=100)
    risk_level: RiskLevel
    search_date: str  # ISO-8601 date: YYYY-MM-DD
    lat: float | None = None
    lng: float | None = None


class SavedProperty(PermitPrediction):
    id: str
    created_at: float
