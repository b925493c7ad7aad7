from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SlotKind(str, Enum):
    CPU = "cpu"
    MOTHERBOARD = "motherboard"
    RAM = "ram"
    GPU = "gpu"
    STORAGE = "storage"
    PSU = "psu"
    CASE = "case"
    COOLER = "cooler"


SpecValue = str | float | int


class ComponentRecord(BaseModel):
    """A single catalog part. Spec keys vary by slot kind."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    type: SlotKind
    name: str
    price: float = Field(ge=0)
    stock_count: int = Field(default=0, ge=0, alias="stockCount")
    image: str = ""
    specs: dict[str, SpecValue] = Field(default_factory=dict)
