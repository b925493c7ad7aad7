from __future__ import annotations

from pydantic import BaseModel, Field

ALL_MANUFACTURERS = "All"


class FilterState(BaseModel):
    query: str = ""
    max_price: float | None = Field(default=None, ge=0)
    manufacturer: str = ALL_MANUFACTURERS
    stock_only: bool = False
    unique_selections: dict[str, set[str]] = Field(default_factory=dict)


class FacetOptionsResponse(BaseModel):
    slot: str
    facets: dict[str, list[str]] = Field(default_factory=dict)
    manufacturers: list[str] = Field(default_factory=list)
