"""Fill-in Planner - replacement student recommendations for coaching lessons.

When students are absent from a lesson slot, or a slot has spare places,
this package finds replacement students who owe lessons, are free at that
time, fit the slot's solo/paired/group rules and sub-group, and are not
blocked on the date (public holidays, class absences, coach unavailable).

Example usage:
    from fillin_planner import BatchFillInAdapter, DataLoader

    loader = DataLoader(Path("data"))
    adapter = BatchFillInAdapter(
        loader.roster.students, loader.blocks.blocks, loader.statuses.statuses
    )
    report = adapter.run(loader.slots.slots, include_partial=True)

    for result in report.results:
        names = [m.name for m in result.recommended_group]
        print(f"{result.slot.schedule_id} {result.slot.slot_date}: {names}")
"""

from .adapters import BatchFillInAdapter, SingleSlotAdapter, SingleSlotSuggestion
from .availability import AvailabilityCache, is_available, parse_availability
from .config import DataLoader
from .engine import (
    FilterStats,
    PairingCheck,
    check_violation,
    effective_capacity,
    filter_candidates,
    is_blocked,
    recommend,
)
from .exceptions import (
    FillInError,
    InvalidRecordError,
    MissingSlotDateError,
    SourceNotFoundError,
    UnknownOccupantError,
    UnsupportedFormatError,
)
from .exporters import CSVExporter, ExcelExporter, JSONExporter, get_exporter
from .models import (
    BlockType,
    DailyBlock,
    DailyStatus,
    FillInReport,
    FillInStatistics,
    RecommendedGroupMember,
    Slot,
    SlotRecommendation,
    Student,
)

__version__ = "0.1.0"

__all__ = [
    # Adapters
    "BatchFillInAdapter",
    "SingleSlotAdapter",
    "SingleSlotSuggestion",
    # Engine
    "AvailabilityCache",
    "FilterStats",
    "PairingCheck",
    "check_violation",
    "effective_capacity",
    "filter_candidates",
    "is_available",
    "is_blocked",
    "parse_availability",
    "recommend",
    # Sources
    "DataLoader",
    # Models
    "BlockType",
    "DailyBlock",
    "DailyStatus",
    "FillInReport",
    "FillInStatistics",
    "RecommendedGroupMember",
    "Slot",
    "SlotRecommendation",
    "Student",
    # Exporters
    "JSONExporter",
    "CSVExporter",
    "ExcelExporter",
    "get_exporter",
    # Exceptions
    "FillInError",
    "MissingSlotDateError",
    "InvalidRecordError",
    "SourceNotFoundError",
    "UnknownOccupantError",
    "UnsupportedFormatError",
]
