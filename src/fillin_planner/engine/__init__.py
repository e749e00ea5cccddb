"""Fill-in recommendation engine.

Pure functions over in-memory rosters, slots and blocks:
- check_violation: pairing and sub-group rules
- is_blocked: date-scoped blocks
- filter_candidates: eligible pool for a slot
- recommend: greedy ranked selection

Usage:
    from fillin_planner.engine import effective_capacity, filter_candidates, recommend

    capacity = effective_capacity(slot.capacity, originals)
    pool = filter_candidates(students, slot, blocks, occupants)
    group = recommend(slot, pool, occupants, capacity)
"""

from .blocks import block_applies, blocks_for_dates, find_blocking, is_blocked
from .candidates import FilterStats, filter_candidates, require_slot_date
from .occupancy import (
    apply_statuses,
    check_occupants,
    effective_capacity,
    established_sub_group,
    lookup_students,
    resolve_current_occupants,
)
from .pairing import PairingCheck, check_violation
from .recommender import needed_count, rank_candidates, recommend

__all__ = [
    # Pairing
    "PairingCheck",
    "check_violation",
    # Blocks
    "block_applies",
    "blocks_for_dates",
    "find_blocking",
    "is_blocked",
    # Candidates
    "FilterStats",
    "filter_candidates",
    "require_slot_date",
    # Occupancy
    "apply_statuses",
    "check_occupants",
    "effective_capacity",
    "established_sub_group",
    "lookup_students",
    "resolve_current_occupants",
    # Recommender
    "needed_count",
    "rank_candidates",
    "recommend",
]
