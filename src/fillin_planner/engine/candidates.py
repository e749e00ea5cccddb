"""Eligible candidate pool for one slot."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..availability import AvailabilityCache, is_available
from ..exceptions import MissingSlotDateError
from ..models import DailyBlock, Slot, Student
from .blocks import is_blocked
from .occupancy import check_occupants, established_sub_group


@dataclass
class FilterStats:
    """Counts of students excluded from a slot's pool, by reason."""

    not_owed: int = 0
    inactive: int = 0
    occupant: int = 0
    unavailable: int = 0
    sub_group: int = 0
    blocked: int = 0
    eligible: int = 0

    @property
    def total_skipped(self) -> int:
        """Number of students excluded for any reason."""
        return (
            self.not_owed
            + self.inactive
            + self.occupant
            + self.unavailable
            + self.sub_group
            + self.blocked
        )

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary."""
        return {
            "not_owed": self.not_owed,
            "inactive": self.inactive,
            "occupant": self.occupant,
            "unavailable": self.unavailable,
            "sub_group": self.sub_group,
            "blocked": self.blocked,
            "eligible": self.eligible,
        }


def require_slot_date(slot: Slot) -> str:
    """Return the slot's date, raising if it is missing."""
    if not slot.slot_date:
        raise MissingSlotDateError(slot.schedule_id)
    return slot.slot_date


def filter_candidates(
    all_students: Iterable[Student],
    slot: Slot,
    blocks: Sequence[DailyBlock],
    occupants: Sequence[Student],
    cache: AvailabilityCache | None = None,
    stats: FilterStats | None = None,
) -> list[Student]:
    """Compute the eligible fill-in candidates for a slot.

    A student is eligible when they owe lessons, are active, are not
    already on the slot, are available at the slot's day and time, do not
    carry a different sub-group from the one established in the slot, and
    are not blocked on the slot's date.

    Input order is preserved; ranking is the recommender's job.

    Args:
        all_students: Roster
        slot: Slot to fill
        blocks: Daily blocks (only the slot's date is considered)
        occupants: Details of every current occupant of the slot, used for
            the sub-group gate
        cache: Availability cache for the current pass
        stats: Optional counters updated with exclusion reasons

    Returns:
        Eligible students in roster order

    Raises:
        MissingSlotDateError: If the slot has no date
        ValueError: If occupants do not match the slot's current occupants
    """
    slot_date = require_slot_date(slot)
    check_occupants(slot, occupants)
    if stats is None:
        stats = FilterStats()

    excluded_ids = set(slot.original_student_ids) | set(slot.occupant_ids)
    target_sub_group = established_sub_group(occupants)

    eligible: list[Student] = []
    for student in all_students:
        if student.lessons_owed <= 0:
            stats.not_owed += 1
            continue
        if not student.is_active:
            stats.inactive += 1
            continue
        if student.id in excluded_ids:
            stats.occupant += 1
            continue
        if not is_available(student, slot.day_of_week, slot.start_time, cache):
            stats.unavailable += 1
            continue
        if target_sub_group is not None and student.sub_group and student.sub_group != target_sub_group:
            stats.sub_group += 1
            continue
        if is_blocked(student, slot_date, slot.coach_id, blocks):
            stats.blocked += 1
            continue
        eligible.append(student)

    stats.eligible += len(eligible)
    return eligible
