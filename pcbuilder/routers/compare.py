"""Compare router — score and tabulate a set of catalog components."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status

from pcbuilder.catalog.accessor import InMemoryCatalog
from pcbuilder.compare.scorer import EmptyComparisonError, compare_components
from pcbuilder.config import Settings
from pcbuilder.schemas.comparison import CompareRequest, ComparisonResult

router = APIRouter()


def _get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _get_catalog(request: Request) -> InMemoryCatalog:
    return request.app.state.catalog


@router.post("/", response_model=ComparisonResult)
async def compare(
    data: CompareRequest,
    catalog: InMemoryCatalog = Depends(_get_catalog),
    settings: Settings = Depends(_get_settings),
):
    """Compare components by id. The overall winner has the highest score."""
    items = catalog.get_many(data.ids)
    try:
        return compare_components(
            items,
            currency=settings.currency_label,
            max_spec_rows=settings.comparison_max_spec_rows,
        )
    except EmptyComparisonError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)
        )
