"""Picker session: one FilterState scoped to the slot being picked."""

from __future__ import annotations

from collections.abc import Iterable

from pcbuilder.catalog.accessor import parse_slot_kind
from pcbuilder.catalog.filters import (
    facet_attributes,
    facet_options,
    filter_catalog,
    manufacturer_options,
)
from pcbuilder.schemas.component import ComponentRecord, SlotKind
from pcbuilder.schemas.filters import FilterState


class PickerSession:
    def __init__(self, slot: SlotKind | str):
        self._slot = parse_slot_kind(slot)
        self._state = FilterState()

    @property
    def slot(self) -> SlotKind:
        return self._slot

    @property
    def state(self) -> FilterState:
        return self._state

    def set_slot(self, slot: SlotKind | str) -> None:
        """Switch the target slot. Filters reset when the slot changes."""
        kind = parse_slot_kind(slot)
        if kind != self._slot:
            self._slot = kind
            self._state = FilterState()

    def update(self, **fields) -> FilterState:
        """Replace plain filter fields (query, max_price, manufacturer, stock_only)."""
        if "unique_selections" in fields:
            raise ValueError("Use toggle_facet() to change facet selections")
        unknown = set(fields) - set(FilterState.model_fields)
        if unknown:
            raise ValueError(f"Unknown filter fields: {sorted(unknown)}")
        self._state = FilterState.model_validate(
            {**self._state.model_dump(), **fields}
        )
        return self._state

    def toggle_facet(self, attribute: str, value: str) -> FilterState:
        """Add ``value`` to the attribute's selection, or remove it if present."""
        if attribute not in facet_attributes(self._slot):
            raise ValueError(
                f"{attribute!r} is not a facet of {self._slot.value}"
            )
        selections = {k: set(v) for k, v in self._state.unique_selections.items()}
        chosen = selections.setdefault(attribute, set())
        if value in chosen:
            chosen.remove(value)
        else:
            chosen.add(value)
        self._state = self._state.model_copy(update={"unique_selections": selections})
        return self._state

    def clear_facets(self) -> FilterState:
        self._state = self._state.model_copy(update={"unique_selections": {}})
        return self._state

    def results(self, items: Iterable[ComponentRecord]) -> list[ComponentRecord]:
        return filter_catalog(items, self._slot, self._state)

    def options(self, items: Iterable[ComponentRecord]) -> dict[str, list[str]]:
        return facet_options(items, self._slot)

    def manufacturers(self, items: Iterable[ComponentRecord]) -> list[str]:
        return manufacturer_options(items, self._slot)
