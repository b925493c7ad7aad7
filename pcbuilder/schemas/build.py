from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pcbuilder.schemas.component import ComponentRecord, SlotKind
from pcbuilder.schemas.compatibility import CompatibilityReport
from pcbuilder.schemas.power import PowerSummary


class BuildSlotMap(BaseModel):
    """Slot → component assignment. One field per slot kind, so a slot can
    never hold more than one component."""

    model_config = ConfigDict(frozen=True)

    cpu: ComponentRecord | None = None
    motherboard: ComponentRecord | None = None
    ram: ComponentRecord | None = None
    gpu: ComponentRecord | None = None
    storage: ComponentRecord | None = None
    psu: ComponentRecord | None = None
    case: ComponentRecord | None = None
    cooler: ComponentRecord | None = None

    def get(self, slot: SlotKind | str) -> ComponentRecord | None:
        return getattr(self, SlotKind(slot).value)

    def occupied(self) -> list[tuple[SlotKind, ComponentRecord]]:
        """Occupied slots in fixed slot order."""
        pairs = []
        for slot in SlotKind:
            component = self.get(slot)
            if component is not None:
                pairs.append((slot, component))
        return pairs

    def with_component(
        self, slot: SlotKind | str, component: ComponentRecord | None
    ) -> BuildSlotMap:
        return self.model_copy(update={SlotKind(slot).value: component})

    def component_ids(self) -> dict[str, str | None]:
        return {
            slot.value: (c.id if (c := self.get(slot)) is not None else None)
            for slot in SlotKind
        }


class SavedBuildSummary(BaseModel):
    id: str
    name: str
    total: float
    watts: float


class BuildSnapshot(BaseModel):
    """Derived view of a build, recomputed from the slot map."""

    components: dict[str, str | None] = Field(default_factory=dict)
    total_price: float = 0.0
    watts: float = 0.0
    recommended_psu: int = 0
    warnings: list[str] = Field(default_factory=list)
    is_compatible: bool = True
    compatibility: CompatibilityReport
    power: PowerSummary


class SelectComponentRequest(BaseModel):
    component_id: str


class SaveBuildRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
