"""Catalog router — browse, facet-filter and look up components."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status

from pcbuilder.catalog.accessor import InMemoryCatalog, UnknownSlotKindError
from pcbuilder.catalog.filters import facet_options, filter_catalog, manufacturer_options
from pcbuilder.config import Settings
from pcbuilder.schemas.component import ComponentRecord
from pcbuilder.schemas.filters import FacetOptionsResponse, FilterState

router = APIRouter()


def _get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _get_catalog(request: Request) -> InMemoryCatalog:
    return request.app.state.catalog


def _slot_items(catalog: InMemoryCatalog, slot: str):
    try:
        return catalog.get_by_type(slot)
    except UnknownSlotKindError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _get_item(catalog: InMemoryCatalog, component_id: str) -> ComponentRecord:
    item = catalog.get_by_id(component_id)
    if item is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Component {component_id} not found",
        )
    return item


@router.get("/", response_model=list[ComponentRecord])
async def list_all_components(catalog: InMemoryCatalog = Depends(_get_catalog)):
    """Return the full catalog."""
    return list(catalog.get_all())


@router.get("/slots/{slot}", response_model=list[ComponentRecord])
async def list_slot(slot: str, catalog: InMemoryCatalog = Depends(_get_catalog)):
    """Return every component of one slot kind."""
    return list(_slot_items(catalog, slot))


@router.post("/slots/{slot}/filter", response_model=list[ComponentRecord])
async def filter_slot(
    slot: str,
    state: FilterState,
    catalog: InMemoryCatalog = Depends(_get_catalog),
):
    """Apply query, price, manufacturer, stock and facet filters to a slot."""
    return filter_catalog(_slot_items(catalog, slot), slot, state)


@router.get("/slots/{slot}/facets", response_model=FacetOptionsResponse)
async def slot_facets(slot: str, catalog: InMemoryCatalog = Depends(_get_catalog)):
    """Selectable facet values, derived from the current slot slice."""
    items = _slot_items(catalog, slot)
    return FacetOptionsResponse(
        slot=slot,
        facets=facet_options(items, slot),
        manufacturers=manufacturer_options(items, slot),
    )


@router.get("/items/{component_id}", response_model=ComponentRecord)
async def get_component(
    component_id: str, catalog: InMemoryCatalog = Depends(_get_catalog)
):
    return _get_item(catalog, component_id)


@router.get("/items/{component_id}/similar", response_model=list[ComponentRecord])
async def similar_components(
    component_id: str,
    catalog: InMemoryCatalog = Depends(_get_catalog),
    settings: Settings = Depends(_get_settings),
):
    """Other components of the same slot kind."""
    item = _get_item(catalog, component_id)
    return catalog.similar_to(item, limit=settings.similar_products_limit)
