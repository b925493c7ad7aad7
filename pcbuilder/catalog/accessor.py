"""Catalog Accessor: read-only access to the loaded component catalog.

The engine never reaches for a global catalog; callers inject an accessor
(or a plain list of records) into every operation.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from pcbuilder.schemas.component import ComponentRecord, SlotKind

logger = logging.getLogger(__name__)

SAMPLE_CATALOG_PATH = Path(__file__).parent.parent / "data" / "catalog.json"


class UnknownSlotKindError(LookupError):
    """Raised when a slot kind outside the fixed set is requested."""

    def __init__(self, slot: object):
        self.slot = slot
        super().__init__(f"Unknown slot kind: {slot!r}")


def parse_slot_kind(slot: SlotKind | str) -> SlotKind:
    try:
        return SlotKind(slot)
    except ValueError:
        raise UnknownSlotKindError(slot) from None


class CatalogAccessor(Protocol):
    def get_all(self) -> Sequence[ComponentRecord]: ...

    def get_by_type(self, slot: SlotKind | str) -> Sequence[ComponentRecord]: ...


class InMemoryCatalog:
    """Catalog held as an ordered list of immutable records."""

    def __init__(self, records: Iterable[ComponentRecord]):
        self._records: tuple[ComponentRecord, ...] = tuple(records)

    def __len__(self) -> int:
        return len(self._records)

    def get_all(self) -> Sequence[ComponentRecord]:
        return self._records

    def get_by_type(self, slot: SlotKind | str) -> Sequence[ComponentRecord]:
        kind = parse_slot_kind(slot)
        return tuple(r for r in self._records if r.type == kind)

    def get_by_id(self, component_id: str) -> ComponentRecord | None:
        for record in self._records:
            if record.id == component_id:
                return record
        return None

    def get_many(self, component_ids: Iterable[str]) -> list[ComponentRecord]:
        """Records for ``component_ids`` in catalog order. Unknown ids are
        dropped."""
        wanted = set(component_ids)
        return [r for r in self._records if r.id in wanted]

    def similar_to(self, component: ComponentRecord, limit: int = 4) -> list[ComponentRecord]:
        """Other parts of the same slot kind, in catalog order."""
        similar = [
            r for r in self._records if r.type == component.type and r.id != component.id
        ]
        return similar[:limit]


def parse_records(raw: Iterable[dict]) -> list[ComponentRecord]:
    """Validate raw dicts into records, skipping malformed entries."""
    records: list[ComponentRecord] = []
    for i, entry in enumerate(raw):
        try:
            records.append(ComponentRecord.model_validate(entry))
        except ValidationError as e:
            logger.warning("Skipping catalog entry %d: %s", i, e.error_count())
    return records


def load_catalog(path: str | Path = SAMPLE_CATALOG_PATH) -> InMemoryCatalog:
    """Load a catalog from a JSON list, or an object with a "components" list."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("components", [])

    catalog = InMemoryCatalog(parse_records(data))
    logger.info("Loaded %d catalog components from %s", len(catalog), path)
    return catalog
