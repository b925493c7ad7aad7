"""Comparative Scorer — ranking score and side-by-side comparison table.

The score is dimensionless and only meaningful relative to the other parts
in the same comparison set.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from pcbuilder.schemas.comparison import ComparisonResult, ComparisonRow
from pcbuilder.schemas.component import ComponentRecord
from pcbuilder.specs.extractor import (
    MISSING_VALUE,
    extract_metric,
    format_value,
    to_number,
)

CORE_KEYS = ("Core Count", "Cores")
THREAD_KEYS = ("Thread Count", "Threads")
BOOST_CLOCK_KEYS = ("Max Boost Clock", "Boost Clock", "Clock Speed")
MEMORY_KEYS = ("VRAM", "Memory Size", "Capacity")

RELIABILITY_CAP = 40
VALUE_SCALE = 100_000

WEIGHT_PERFORMANCE = 0.6
WEIGHT_VALUE = 0.3
WEIGHT_RELIABILITY = 0.1

PRICE_ROW_KEY = "Price"
DEFAULT_CURRENCY = "PHP"


class EmptyComparisonError(ValueError):
    """Raised when there is nothing to compare."""

    def __init__(self) -> None:
        super().__init__("No items to compare")


# ─── Scoring ───


def performance_score(item: ComponentRecord) -> float:
    cores = extract_metric(item, CORE_KEYS)
    threads = extract_metric(item, THREAD_KEYS)
    boost = extract_metric(item, BOOST_CLOCK_KEYS)
    memory = extract_metric(item, MEMORY_KEYS)
    return cores * 5 + threads * 2 + boost * 6 + memory * 2


def value_score(item: ComponentRecord) -> float:
    return performance_score(item) / max(item.price, 1) * VALUE_SCALE


def reliability_score(item: ComponentRecord) -> float:
    return float(min(item.stock_count, RELIABILITY_CAP))


def score_component(item: ComponentRecord) -> float:
    return (
        WEIGHT_PERFORMANCE * performance_score(item)
        + WEIGHT_VALUE * value_score(item)
        + WEIGHT_RELIABILITY * reliability_score(item)
    )


def pick_winner(items: Sequence[ComponentRecord]) -> ComponentRecord:
    """Highest scoring item. Ties go to the earliest item."""
    if not items:
        raise EmptyComparisonError()
    # sorted() is stable, so equal scores keep input order
    return sorted(items, key=score_component, reverse=True)[0]


# ─── Comparison Table ───


def format_price(price: float, currency: str = DEFAULT_CURRENCY) -> str:
    if float(price).is_integer():
        return f"{currency} {int(price):,}"
    return f"{currency} {price:,.2f}"


def _best_index(values: Sequence[float], better: Callable[[float, float], bool]) -> int:
    best = 0
    for i, value in enumerate(values):
        if better(value, values[best]):
            best = i
    return best


def _spec_keys(items: Sequence[ComponentRecord]) -> list[str]:
    """Union of spec keys in first-seen order."""
    keys: dict[str, None] = {}
    for item in items:
        for key in item.specs:
            keys.setdefault(key, None)
    return list(keys)


def build_comparison_table(
    items: Sequence[ComponentRecord],
    currency: str = DEFAULT_CURRENCY,
    max_spec_rows: int | None = None,
) -> list[ComparisonRow]:
    """Price row first, then one row per spec key across all items.

    A row gets a winner only when at least two items are compared and every
    value in the row is numeric. Lowest price wins; highest spec value wins.
    """
    if not items:
        raise EmptyComparisonError()
    comparable = len(items) > 1

    rows = [
        ComparisonRow(
            key=PRICE_ROW_KEY,
            values=[format_price(item.price, currency) for item in items],
            best_index=(
                _best_index([item.price for item in items], lambda a, b: a < b)
                if comparable
                else None
            ),
        )
    ]

    keys = _spec_keys(items)
    if max_spec_rows is not None:
        keys = keys[:max_spec_rows]

    for key in keys:
        values = [
            format_value(item.specs[key]) if key in item.specs else MISSING_VALUE
            for item in items
        ]
        numbers = [to_number(value) for value in values]

        best_index = None
        if comparable and all(n is not None for n in numbers):
            best_index = _best_index(numbers, lambda a, b: a > b)

        rows.append(ComparisonRow(key=key, values=values, best_index=best_index))

    return rows


def compare_components(
    items: Sequence[ComponentRecord],
    currency: str = DEFAULT_CURRENCY,
    max_spec_rows: int | None = None,
) -> ComparisonResult:
    """Overall winner, per-item scores and the comparison table."""
    winner = pick_winner(items)
    return ComparisonResult(
        items=[item.id for item in items],
        winner_id=winner.id,
        scores={item.id: score_component(item) for item in items},
        rows=build_comparison_table(items, currency, max_spec_rows),
    )
