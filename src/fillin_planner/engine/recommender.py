"""Greedy fill-in selection for one slot."""

from collections.abc import Sequence

from ..models import RecommendedGroupMember, Slot, Student
from .occupancy import check_occupants, established_sub_group
from .pairing import check_violation


def rank_candidates(candidates: Sequence[Student]) -> list[Student]:
    """Sort candidates by lessons owed, highest first.

    The sort is stable: candidates owing the same number of lessons keep
    their input order.
    """
    return sorted(candidates, key=lambda student: student.lessons_owed, reverse=True)


def needed_count(slot: Slot, effective_capacity: int) -> int:
    """Number of places left in a slot."""
    return effective_capacity - len(slot.occupant_ids)


def recommend(
    slot: Slot,
    candidates: Sequence[Student],
    occupants: Sequence[Student],
    effective_capacity: int,
) -> list[RecommendedGroupMember]:
    """Pick the fill-in group for a slot.

    Candidates are taken in ranked order. Once a sub-grouped student is
    the first one accepted, later candidates from other sub-groups are
    skipped. Each acceptance is checked against the pairing rules using the
    occupants accepted so far.

    Args:
        slot: Slot to fill
        candidates: Eligible candidates (see filter_candidates)
        occupants: Details of every current occupant of the slot
        effective_capacity: Capacity derived from the original students
            (see effective_capacity in occupancy)

    Returns:
        Snapshots of the recommended students, at most the needed count

    Raises:
        ValueError: If occupants do not match the slot's current occupants
    """
    check_occupants(slot, occupants)
    needed = needed_count(slot, effective_capacity)
    if needed <= 0:
        return []

    running_occupants = list(occupants)
    compulsory_sub_group = established_sub_group(running_occupants)
    recommended: list[RecommendedGroupMember] = []

    for candidate in rank_candidates(candidates):
        if len(recommended) >= needed:
            break
        if (
            compulsory_sub_group is not None
            and candidate.sub_group
            and candidate.sub_group != compulsory_sub_group
        ):
            continue

        check = check_violation(candidate, running_occupants, effective_capacity)
        if check.violation:
            continue

        recommended.append(RecommendedGroupMember.from_student(candidate))
        running_occupants.append(candidate)
        if len(recommended) == 1 and compulsory_sub_group is None and candidate.sub_group:
            compulsory_sub_group = candidate.sub_group

    return recommended
