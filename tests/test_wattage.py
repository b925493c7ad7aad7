"""Unit tests for the Wattage Estimator."""

import math

import pytest

from pcbuilder.power.wattage import (
    estimate_watts,
    power_summary,
    recommended_psu,
    slot_draw,
    wattage_breakdown,
)
from pcbuilder.schemas.build import BuildSlotMap
from pcbuilder.schemas.component import ComponentRecord, SlotKind


# ─── Fixtures ───


def _part(slot: SlotKind, part_id: str | None = None, **specs) -> ComponentRecord:
    return ComponentRecord(
        id=part_id or f"{slot.value}-1",
        type=slot,
        name=f"Test {slot.value}",
        price=1000,
        specs=specs,
    )


def _full_build() -> BuildSlotMap:
    return BuildSlotMap(
        cpu=_part(SlotKind.CPU, TDP="125 W"),
        gpu=_part(SlotKind.GPU, TDP="320 W"),
        motherboard=_part(SlotKind.MOTHERBOARD),
        ram=_part(SlotKind.RAM),
        storage=_part(SlotKind.STORAGE),
        cooler=_part(SlotKind.COOLER),
        psu=_part(SlotKind.PSU, Wattage="850 W", TDP="999 W"),
        case=_part(SlotKind.CASE, TDP="40 W"),
    )


# ═══════════════════════════════════════════════════════════
# Load estimate
# ═══════════════════════════════════════════════════════════


class TestEstimateWatts:
    def test_empty_build(self):
        assert estimate_watts(BuildSlotMap()) == 0

    def test_cpu_and_gpu_only(self):
        build = BuildSlotMap(
            cpu=_part(SlotKind.CPU, TDP=125), gpu=_part(SlotKind.GPU, TDP=320)
        )
        assert estimate_watts(build) == 445

    def test_fallback_draws(self):
        build = BuildSlotMap(
            motherboard=_part(SlotKind.MOTHERBOARD),
            ram=_part(SlotKind.RAM),
            storage=_part(SlotKind.STORAGE),
            cooler=_part(SlotKind.COOLER),
        )
        assert estimate_watts(build) == 45 + 10 + 8 + 10

    def test_cpu_without_tdp_draws_nothing(self):
        assert estimate_watts(BuildSlotMap(cpu=_part(SlotKind.CPU))) == 0

    def test_psu_and_case_are_not_load(self):
        build = BuildSlotMap(
            psu=_part(SlotKind.PSU, TDP="999 W"), case=_part(SlotKind.CASE, TDP=40)
        )
        assert estimate_watts(build) == 0

    def test_full_build_sum(self):
        assert estimate_watts(_full_build()) == 125 + 320 + 45 + 10 + 8 + 10

    def test_explicit_tdp_overrides_fallback(self):
        build = BuildSlotMap(motherboard=_part(SlotKind.MOTHERBOARD, TDP="60 W"))
        assert estimate_watts(build) == 60

    def test_negative_tdp_never_goes_below_zero(self):
        build = BuildSlotMap(cpu=_part(SlotKind.CPU, TDP="-50 W"))
        assert estimate_watts(build) == 0

    def test_removing_a_slot_never_increases_total(self):
        build = _full_build()
        total = estimate_watts(build)
        for slot in SlotKind:
            assert estimate_watts(build.with_component(slot, None)) <= total

    def test_equals_sum_of_slot_draws(self):
        build = _full_build()
        expected = sum(slot_draw(slot, c) for slot, c in build.occupied())
        assert estimate_watts(build) == expected

    def test_idempotent(self):
        build = _full_build()
        assert estimate_watts(build) == estimate_watts(build)


class TestRecommendedPsu:
    def test_worked_example(self):
        assert recommended_psu(445) == 600

    def test_exact_step(self):
        assert recommended_psu(400) == 500

    def test_zero_load(self):
        assert recommended_psu(0) == 0

    @pytest.mark.parametrize("watts", [1, 49, 137.5, 445, 560, 1001])
    def test_multiple_of_fifty_with_headroom(self, watts):
        psu = recommended_psu(watts)
        assert psu % 50 == 0
        assert psu >= math.ceil(watts * 1.25)


# ═══════════════════════════════════════════════════════════
# Breakdown & summary
# ═══════════════════════════════════════════════════════════


class TestPowerSummary:
    def test_breakdown_marks_fallbacks(self):
        lines = wattage_breakdown(_full_build())
        by_slot = {line.slot: line for line in lines}
        assert "psu" not in by_slot
        assert "case" not in by_slot
        assert by_slot["cpu"].estimated is False
        assert by_slot["ram"].estimated is True
        assert by_slot["ram"].watts == 10

    def test_headroom_against_selected_psu(self):
        summary = power_summary(_full_build())
        assert summary.total_watts == 518
        assert summary.recommended_psu == 650
        assert summary.psu_capacity == 850
        assert summary.headroom == 850 - 518
        assert summary.usage_ratio == pytest.approx(518 / 850)

    def test_headroom_against_recommended_when_no_psu(self):
        build = BuildSlotMap(
            cpu=_part(SlotKind.CPU, TDP=125), gpu=_part(SlotKind.GPU, TDP=320)
        )
        summary = power_summary(build)
        assert summary.psu_capacity == 600
        assert summary.headroom == 155

    def test_empty_build_summary(self):
        summary = power_summary(BuildSlotMap())
        assert summary.total_watts == 0
        assert summary.usage_ratio == 0
        assert summary.lines == []
