"""Build session: business logic for the current build and saved builds.

Holds only the slot assignment. Every derived value (totals, watts,
warnings) is recomputed from it in ``snapshot()``.
"""

from __future__ import annotations

import logging
import uuid

from pcbuilder.catalog.accessor import parse_slot_kind
from pcbuilder.power.wattage import estimate_watts, power_summary, recommended_psu
from pcbuilder.schemas.build import BuildSlotMap, BuildSnapshot, SavedBuildSummary
from pcbuilder.schemas.compatibility import CompatibilityStatus
from pcbuilder.schemas.component import ComponentRecord, SlotKind
from pcbuilder.validation.engine import run_compatibility_checks

logger = logging.getLogger(__name__)


class SlotMismatchError(ValueError):
    """Raised when a component is placed into a slot of another kind."""

    def __init__(self, component: ComponentRecord, slot: SlotKind):
        self.component = component
        self.slot = slot
        super().__init__(
            f"{component.id} is a {component.type.value}, not a {slot.value}"
        )


def total_price(build: BuildSlotMap) -> float:
    return sum((component.price for _, component in build.occupied()), 0.0)


def snapshot_of(build: BuildSlotMap) -> BuildSnapshot:
    """Derive totals, power and compatibility from a slot map."""
    watts = estimate_watts(build)
    report = run_compatibility_checks(build, watts)
    return BuildSnapshot(
        components=build.component_ids(),
        total_price=total_price(build),
        watts=watts,
        recommended_psu=recommended_psu(watts),
        warnings=report.warnings,
        is_compatible=report.status == CompatibilityStatus.OK,
        compatibility=report,
        power=power_summary(build),
    )


class BuildSession:
    def __init__(self, build: BuildSlotMap | None = None):
        self._build = build or BuildSlotMap()
        self._saved: list[SavedBuildSummary] = []

    @property
    def build(self) -> BuildSlotMap:
        return self._build

    @property
    def saved_builds(self) -> list[SavedBuildSummary]:
        return list(self._saved)

    def select(
        self, component: ComponentRecord, slot: SlotKind | str | None = None
    ) -> BuildSnapshot:
        """Put ``component`` in its slot, replacing whatever was there."""
        target = component.type if slot is None else parse_slot_kind(slot)
        if component.type != target:
            raise SlotMismatchError(component, target)
        self._build = self._build.with_component(target, component)
        logger.info("Selected %s for %s", component.id, target.value)
        return self.snapshot()

    def remove(self, slot: SlotKind | str) -> BuildSnapshot:
        kind = parse_slot_kind(slot)
        self._build = self._build.with_component(kind, None)
        logger.info("Cleared %s", kind.value)
        return self.snapshot()

    def clear(self) -> BuildSnapshot:
        self._build = BuildSlotMap()
        return self.snapshot()

    def snapshot(self) -> BuildSnapshot:
        return snapshot_of(self._build)

    def save(self, name: str) -> SavedBuildSummary:
        """Append a point-in-time summary of the current build."""
        current = self.snapshot()
        summary = SavedBuildSummary(
            id=uuid.uuid4().hex,
            name=name,
            total=current.total_price,
            watts=current.watts,
        )
        self._saved.append(summary)
        logger.info("Saved build %s (%s)", summary.id, name)
        return summary
