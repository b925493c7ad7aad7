from pcbuilder.schemas.component import ComponentRecord, SlotKind
from pcbuilder.schemas.build import BuildSlotMap, BuildSnapshot, SavedBuildSummary
from pcbuilder.schemas.filters import FilterState
from pcbuilder.schemas.compatibility import CompatibilityReport
from pcbuilder.schemas.comparison import ComparisonRow, ComparisonResult
from pcbuilder.schemas.power import PowerSummary, WattageLine

__all__ = [
    "ComponentRecord",
    "SlotKind",
    "BuildSlotMap",
    "BuildSnapshot",
    "SavedBuildSummary",
    "FilterState",
    "CompatibilityReport",
    "ComparisonRow",
    "ComparisonResult",
    "PowerSummary",
    "WattageLine",
]
