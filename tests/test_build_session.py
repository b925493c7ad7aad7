"""Unit tests for the build session (Build State Store) and catalog accessor."""

import pytest

from pcbuilder.catalog.accessor import (
    InMemoryCatalog,
    UnknownSlotKindError,
    load_catalog,
    parse_records,
)
from pcbuilder.schemas.compatibility import CompatibilityStatus
from pcbuilder.schemas.component import ComponentRecord, SlotKind
from pcbuilder.services.build_session import BuildSession, SlotMismatchError


# ─── Fixtures ───


def _part(part_id: str, slot: SlotKind, price: float = 1000, **specs) -> ComponentRecord:
    return ComponentRecord(id=part_id, type=slot, name=part_id, price=price, specs=specs)


def _am5_cpu() -> ComponentRecord:
    return _part("cpu-am5", SlotKind.CPU, 15000, Socket="AM5", TDP="125 W")


def _am4_board() -> ComponentRecord:
    return _part("mb-am4", SlotKind.MOTHERBOARD, 7000, Socket="AM4")


def _am5_board() -> ComponentRecord:
    return _part("mb-am5", SlotKind.MOTHERBOARD, 11000, Socket="AM5")


# ═══════════════════════════════════════════════════════════
# BuildSession
# ═══════════════════════════════════════════════════════════


class TestBuildSession:
    def test_starts_empty(self):
        snap = BuildSession().snapshot()
        assert snap.total_price == 0
        assert snap.watts == 0
        assert snap.warnings == []
        assert snap.is_compatible is True
        assert set(snap.components) == {slot.value for slot in SlotKind}

    def test_select_recomputes_derived_values(self):
        session = BuildSession()
        session.select(_am5_cpu())
        snap = session.select(_am4_board())
        assert snap.total_price == 22000
        assert snap.watts == 125 + 45
        assert snap.recommended_psu == 250
        assert len(snap.warnings) == 1
        assert snap.compatibility.status == CompatibilityStatus.WARNINGS

    def test_replacing_a_slot_clears_warning(self):
        session = BuildSession()
        session.select(_am5_cpu())
        session.select(_am4_board())
        snap = session.select(_am5_board())
        assert snap.components["motherboard"] == "mb-am5"
        assert snap.warnings == []
        assert snap.total_price == 26000

    def test_remove(self):
        session = BuildSession()
        session.select(_am5_cpu())
        session.select(_am4_board())
        snap = session.remove("motherboard")
        assert snap.components["motherboard"] is None
        assert snap.total_price == 15000
        assert snap.watts == 125
        assert snap.warnings == []

    def test_slot_mismatch(self):
        with pytest.raises(SlotMismatchError):
            BuildSession().select(_am5_cpu(), SlotKind.GPU)

    def test_unknown_slot_name(self):
        session = BuildSession()
        with pytest.raises(UnknownSlotKindError):
            session.select(_am5_cpu(), "monitor")
        with pytest.raises(UnknownSlotKindError):
            session.remove("monitor")

    def test_clear(self):
        session = BuildSession()
        session.select(_am5_cpu())
        assert session.clear().total_price == 0

    def test_snapshot_is_stable(self):
        session = BuildSession()
        session.select(_am5_cpu())
        assert session.snapshot() == session.snapshot()

    def test_save_appends_point_in_time_summary(self):
        session = BuildSession()
        session.select(_am5_cpu())
        first = session.save("Starter")
        session.select(_am5_board())
        second = session.save("With board")

        saved = session.saved_builds
        assert [s.name for s in saved] == ["Starter", "With board"]
        assert first.total == 15000
        assert first.watts == 125
        assert second.total == 26000
        assert first.id != second.id

    def test_saved_builds_returns_copy(self):
        session = BuildSession()
        session.save("Empty")
        session.saved_builds.clear()
        assert len(session.saved_builds) == 1


# ═══════════════════════════════════════════════════════════
# Catalog accessor
# ═══════════════════════════════════════════════════════════


class TestCatalogAccessor:
    def test_get_by_type_is_stable_subset(self):
        catalog = InMemoryCatalog([_am5_cpu(), _am4_board(), _am5_board()])
        assert [c.id for c in catalog.get_by_type("motherboard")] == ["mb-am4", "mb-am5"]
        assert list(catalog.get_by_type(SlotKind.GPU)) == []

    def test_unknown_slot(self):
        with pytest.raises(UnknownSlotKindError):
            InMemoryCatalog([]).get_by_type("monitor")

    def test_lookup_and_similar(self):
        catalog = InMemoryCatalog([_am5_cpu(), _am4_board(), _am5_board()])
        assert catalog.get_by_id("mb-am4").price == 7000
        assert catalog.get_by_id("nope") is None
        assert [c.id for c in catalog.similar_to(_am4_board())] == ["mb-am5"]

    def test_get_many_keeps_catalog_order(self):
        catalog = InMemoryCatalog([_am5_cpu(), _am4_board(), _am5_board()])
        assert [c.id for c in catalog.get_many(["mb-am5", "cpu-am5", "x"])] == [
            "cpu-am5",
            "mb-am5",
        ]

    def test_parse_records_skips_malformed(self):
        records = parse_records(
            [
                {"id": "ok", "type": "ram", "name": "RAM", "price": 10, "stockCount": 2},
                {"id": "bad", "type": "monitor", "name": "Screen", "price": 10},
                {"id": "neg", "type": "ram", "name": "RAM", "price": -1},
            ]
        )
        assert [r.id for r in records] == ["ok"]
        assert records[0].stock_count == 2

    def test_sample_catalog_covers_every_slot(self):
        catalog = load_catalog()
        for slot in SlotKind:
            assert catalog.get_by_type(slot)
