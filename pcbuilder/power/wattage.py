"""Wattage Estimator — load draw and PSU sizing for a (partial) build.

Each occupied load slot contributes its TDP-like spec value. Slots that
commonly ship without one fall back to a typical draw. The PSU is supply,
not load, and the case draws nothing, so neither is summed.
"""

from __future__ import annotations

import math

from pcbuilder.schemas.build import BuildSlotMap
from pcbuilder.schemas.component import ComponentRecord, SlotKind
from pcbuilder.schemas.power import PowerSummary, WattageLine
from pcbuilder.specs.extractor import extract_metric

TDP_KEYS = ("TDP", "Power Draw", "Board Power")
PSU_WATTAGE_KEYS = ("Wattage",)

# 25% headroom, rounded up to the next 50W step
PSU_HEADROOM_RATIO = 1.25
PSU_STEP_W = 50

FALLBACK_DRAW_W: dict[SlotKind, float] = {
    SlotKind.CPU: 0.0,
    SlotKind.GPU: 0.0,
    SlotKind.MOTHERBOARD: 45.0,
    SlotKind.RAM: 10.0,
    SlotKind.STORAGE: 8.0,
    SlotKind.COOLER: 10.0,
}

NON_LOAD_SLOTS = frozenset({SlotKind.PSU, SlotKind.CASE})


def _slot_draw(slot: SlotKind, component: ComponentRecord) -> tuple[float, bool]:
    """Return (watts, estimated) for one occupied slot."""
    if slot in NON_LOAD_SLOTS:
        return 0.0, False
    tdp = extract_metric(component, TDP_KEYS)
    if tdp > 0:
        return tdp, False
    return FALLBACK_DRAW_W.get(slot, 0.0), True


def slot_draw(slot: SlotKind | str, component: ComponentRecord | None) -> float:
    """Watts contributed by ``component`` sitting in ``slot``."""
    if component is None:
        return 0.0
    watts, _ = _slot_draw(SlotKind(slot), component)
    return watts


def estimate_watts(build: BuildSlotMap) -> float:
    """Total estimated load of every occupied slot. Always >= 0."""
    return sum(
        (slot_draw(slot, component) for slot, component in build.occupied()),
        0.0,
    )


def recommended_psu(watts: float) -> int:
    """PSU capacity with headroom, as a multiple of PSU_STEP_W."""
    if watts <= 0:
        return 0
    return math.ceil(watts * PSU_HEADROOM_RATIO / PSU_STEP_W) * PSU_STEP_W


def psu_capacity(build: BuildSlotMap) -> float:
    """Rated wattage of the selected PSU, 0 if none or unspecified."""
    psu = build.get(SlotKind.PSU)
    if psu is None:
        return 0.0
    return extract_metric(psu, PSU_WATTAGE_KEYS)


def wattage_breakdown(build: BuildSlotMap) -> list[WattageLine]:
    """Per-slot draw lines for every occupied load slot."""
    lines: list[WattageLine] = []
    for slot, component in build.occupied():
        if slot in NON_LOAD_SLOTS:
            continue
        watts, estimated = _slot_draw(slot, component)
        lines.append(
            WattageLine(
                slot=slot.value,
                part=component.name,
                watts=watts,
                estimated=estimated,
            )
        )
    return lines


def power_summary(build: BuildSlotMap) -> PowerSummary:
    """Load total, PSU sizing and headroom against the selected (or the
    recommended) PSU capacity."""
    lines = wattage_breakdown(build)
    total = sum((line.watts for line in lines), 0.0)
    recommended = recommended_psu(total)
    capacity = psu_capacity(build) or float(recommended)
    usage = min(total / capacity, 1.0) if capacity > 0 else 0.0

    return PowerSummary(
        lines=lines,
        total_watts=total,
        recommended_psu=recommended,
        psu_capacity=capacity,
        headroom=capacity - total,
        usage_ratio=usage,
    )
