"""Build router — the current session build and its saved snapshots."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status

from pcbuilder.catalog.accessor import InMemoryCatalog, UnknownSlotKindError, parse_slot_kind
from pcbuilder.schemas.build import (
    BuildSnapshot,
    SavedBuildSummary,
    SaveBuildRequest,
    SelectComponentRequest,
)
from pcbuilder.schemas.component import SlotKind
from pcbuilder.services.build_session import BuildSession, SlotMismatchError

router = APIRouter()


def _get_session(request: Request) -> BuildSession:
    return request.app.state.build_session


def _get_catalog(request: Request) -> InMemoryCatalog:
    return request.app.state.catalog


def _slot(slot: str) -> SlotKind:
    try:
        return parse_slot_kind(slot)
    except UnknownSlotKindError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/", response_model=BuildSnapshot)
async def get_build(session: BuildSession = Depends(_get_session)):
    """Current build with totals, power estimate and compatibility report."""
    return session.snapshot()


@router.put("/{slot}", response_model=BuildSnapshot)
async def select_component(
    slot: str,
    data: SelectComponentRequest,
    session: BuildSession = Depends(_get_session),
    catalog: InMemoryCatalog = Depends(_get_catalog),
):
    """Place a catalog component into a slot."""
    kind = _slot(slot)
    component = catalog.get_by_id(data.component_id)
    if component is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Component {data.component_id} not found",
        )
    try:
        return session.select(component, kind)
    except SlotMismatchError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        )


@router.delete("/{slot}", response_model=BuildSnapshot)
async def remove_component(slot: str, session: BuildSession = Depends(_get_session)):
    return session.remove(_slot(slot))


@router.post("/save", response_model=SavedBuildSummary, status_code=201)
async def save_build(
    data: SaveBuildRequest, session: BuildSession = Depends(_get_session)
):
    """Store a point-in-time summary of the current build for this session."""
    return session.save(data.name)


@router.get("/saved", response_model=list[SavedBuildSummary])
async def list_saved_builds(session: BuildSession = Depends(_get_session)):
    return session.saved_builds
