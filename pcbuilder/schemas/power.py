from __future__ import annotations

from pydantic import BaseModel, Field


class WattageLine(BaseModel):
    slot: str
    part: str
    watts: float
    estimated: bool = False  # fallback draw used, no TDP in the specs


class PowerSummary(BaseModel):
    lines: list[WattageLine] = Field(default_factory=list)
    total_watts: float = 0.0
    recommended_psu: int = 0
    psu_capacity: float = 0.0
    headroom: float = 0.0
    usage_ratio: float = 0.0
