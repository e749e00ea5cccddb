"""Slot occupancy: current occupants, effective capacity and sub-groups."""

from collections.abc import Iterable, Sequence
from dataclasses import replace

from ..constants import (
    DEFAULT_CAPACITY,
    PAIRED,
    SOLO,
    STATUS_ASSIGNED_FILL_IN,
    STATUS_MARKED_ABSENT,
)
from ..models import DailyStatus, Slot, Student, StudentId


def resolve_current_occupants(
    original_ids: Sequence[StudentId],
    statuses: Iterable[DailyStatus],
    schedule_id,
    status_date: str,
) -> list[StudentId]:
    """Work out who occupies a slot on a date.

    Original students marked absent are removed; assigned fill-ins are
    added after the remaining originals. Order is preserved, duplicates
    dropped.

    Args:
        original_ids: Students on the recurring roster
        statuses: Daily statuses (any slot, any date)
        schedule_id: Slot to resolve
        status_date: Date (YYYY-MM-DD)

    Returns:
        Ordered list of current occupant ids
    """
    absent: set[StudentId] = set()
    fill_ins: list[StudentId] = []
    for status in statuses:
        if status.schedule_id != schedule_id or status.status_date != status_date:
            continue
        if status.status == STATUS_MARKED_ABSENT:
            absent.add(status.student_id)
        elif status.status == STATUS_ASSIGNED_FILL_IN:
            fill_ins.append(status.student_id)

    present = [student_id for student_id in original_ids if student_id not in absent]
    occupants: list[StudentId] = []
    for student_id in [*present, *fill_ins]:
        if student_id not in occupants:
            occupants.append(student_id)
    return occupants


def apply_statuses(slot: Slot, statuses: Iterable[DailyStatus]) -> Slot:
    """Fill in a slot's current occupants from daily statuses for its date.

    Returns a new slot; the input is not modified. Slots that already carry
    current occupants, or that have no date, are returned as they are.
    """
    if slot.current_occupant_ids is not None or not slot.slot_date:
        return slot
    occupants = resolve_current_occupants(
        slot.original_student_ids, statuses, slot.schedule_id, slot.slot_date
    )
    return replace(slot, current_occupant_ids=occupants)


def effective_capacity(stored_capacity, original_students: Sequence[Student]) -> int:
    """Real capacity of a slot, derived from its original students.

    Any solo original student makes the slot solo (1); otherwise any paired
    student makes it a pair (2); otherwise the stored capacity applies.
    """
    if isinstance(stored_capacity, int) and not isinstance(stored_capacity, bool) and stored_capacity > 0:
        capacity = stored_capacity
    else:
        capacity = DEFAULT_CAPACITY

    group_sizes = {student.group_of for student in original_students if student is not None}
    if SOLO in group_sizes:
        return SOLO
    if PAIRED in group_sizes:
        return PAIRED
    return capacity


def established_sub_group(occupants: Sequence[Student]) -> str | None:
    """Sub-group shared by the occupants, or None if none is established."""
    for occupant in occupants:
        if occupant is not None and occupant.sub_group:
            return occupant.sub_group
    return None


def lookup_students(
    student_ids: Iterable[StudentId],
    students_by_id: dict[StudentId, Student],
) -> list[Student]:
    """Resolve ids to students, dropping ids that are not on the roster."""
    return [students_by_id[sid] for sid in student_ids if sid in students_by_id]


def check_occupants(slot: Slot, occupants: Sequence[Student]) -> None:
    """Make sure occupant details describe exactly the slot's current occupants.

    Raises:
        ValueError: If a current occupant has no details, or details are
            given for a student who is not in the slot
    """
    given = [occupant.id for occupant in occupants]
    expected = slot.occupant_ids
    if len(given) != len(expected) or set(given) != set(expected):
        raise ValueError(
            f"Slot {slot.schedule_id}: occupant details {given} do not match "
            f"current occupants {expected}"
        )
