from __future__ import annotations

from pydantic import BaseModel, Field


class ComparisonRow(BaseModel):
    key: str
    values: list[str] = Field(default_factory=list)
    best_index: int | None = None


class ComparisonResult(BaseModel):
    items: list[str] = Field(default_factory=list)
    winner_id: str
    scores: dict[str, float] = Field(default_factory=dict)
    rows: list[ComparisonRow] = Field(default_factory=list)


class CompareRequest(BaseModel):
    ids: list[str] = Field(default_factory=list)
