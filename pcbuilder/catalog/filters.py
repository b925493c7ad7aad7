"""Facet Filter Engine — narrows a catalog slice for the part picker.

A candidate is kept only if every active constraint holds: stock, price
ceiling, manufacturer, per-attribute facets (OR within an attribute, AND
across attributes) and the free-text query. Catalog order is preserved.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pcbuilder.catalog.accessor import parse_slot_kind
from pcbuilder.schemas.component import ComponentRecord, SlotKind
from pcbuilder.schemas.filters import ALL_MANUFACTURERS, FilterState
from pcbuilder.specs.extractor import format_value, spec_text

logger = logging.getLogger(__name__)

MANUFACTURER_KEYS = ("Manufacturer", "Brand")

FACET_ATTRIBUTES: dict[SlotKind, tuple[str, ...]] = {
    SlotKind.CPU: ("Socket", "Core Count", "Integrated Graphics"),
    SlotKind.MOTHERBOARD: ("Socket", "Form Factor", "Memory Type", "Chipset"),
    SlotKind.RAM: ("Memory Type", "Capacity", "Speed"),
    SlotKind.GPU: ("Chipset", "VRAM"),
    SlotKind.STORAGE: ("Interface", "Capacity", "Form Factor"),
    SlotKind.PSU: ("Wattage", "Efficiency Rating", "Modular"),
    SlotKind.CASE: ("Form Factor", "Side Panel"),
    SlotKind.COOLER: ("Cooler Type", "Radiator Size"),
}


def facet_attributes(slot: SlotKind | str) -> tuple[str, ...]:
    return FACET_ATTRIBUTES[parse_slot_kind(slot)]


def manufacturer_of(item: ComponentRecord) -> str | None:
    return spec_text(item, MANUFACTURER_KEYS)


def search_text(item: ComponentRecord) -> str:
    """Case-folded haystack of name, type and every spec value."""
    parts = [item.name, item.type.value]
    parts.extend(format_value(v) for v in item.specs.values())
    return " ".join(parts).casefold()


# ─── Predicates ───


def _in_stock(item: ComponentRecord, state: FilterState) -> bool:
    return not state.stock_only or item.stock_count > 0


def _within_price(item: ComponentRecord, state: FilterState) -> bool:
    return not state.max_price or item.price <= state.max_price


def _matches_manufacturer(item: ComponentRecord, state: FilterState) -> bool:
    if state.manufacturer == ALL_MANUFACTURERS:
        return True
    return manufacturer_of(item) == state.manufacturer


def _matches_facets(
    item: ComponentRecord, selections: dict[str, set[str]]
) -> bool:
    for attribute, accepted in selections.items():
        if format_value(item.specs.get(attribute)).strip() not in accepted:
            return False
    return True


def _matches_query(item: ComponentRecord, query: str) -> bool:
    return not query or query in search_text(item)


def filter_catalog(
    items: Iterable[ComponentRecord],
    slot: SlotKind | str,
    state: FilterState,
) -> list[ComponentRecord]:
    """Items of ``slot`` that satisfy every constraint of ``state``."""
    kind = parse_slot_kind(slot)
    allowed = set(FACET_ATTRIBUTES[kind])
    # Empty selections and attributes foreign to this slot do not constrain.
    selections = {
        attr: values
        for attr, values in state.unique_selections.items()
        if values and attr in allowed
    }
    query = state.query.strip().casefold()

    candidates = [item for item in items if item.type == kind]
    matched = [
        item
        for item in candidates
        if _in_stock(item, state)
        and _within_price(item, state)
        and _matches_manufacturer(item, state)
        and _matches_facets(item, selections)
        and _matches_query(item, query)
    ]
    logger.debug("Filter %s: %d of %d kept", kind.value, len(matched), len(candidates))
    return matched


def facet_options(
    items: Iterable[ComponentRecord], slot: SlotKind | str
) -> dict[str, list[str]]:
    """Sorted distinct non-empty values per facet attribute of ``slot``."""
    kind = parse_slot_kind(slot)
    slice_ = [item for item in items if item.type == kind]

    options: dict[str, list[str]] = {}
    for attribute in FACET_ATTRIBUTES[kind]:
        seen = {format_value(item.specs.get(attribute)).strip() for item in slice_}
        seen.discard("")
        options[attribute] = sorted(seen)
    return options


def manufacturer_options(
    items: Iterable[ComponentRecord], slot: SlotKind | str
) -> list[str]:
    """The "All" sentinel followed by the sorted manufacturers of the slice."""
    kind = parse_slot_kind(slot)
    makers = {manufacturer_of(item) for item in items if item.type == kind}
    makers.discard(None)
    return [ALL_MANUFACTURERS, *sorted(makers)]
