"""Group-size pairing and sub-group rules for adding a student to a slot."""

from dataclasses import dataclass

from ..constants import PAIRED, SOLO
from ..models import Student
from .occupancy import established_sub_group


@dataclass(frozen=True)
class PairingCheck:
    """Outcome of a pairing rule check."""

    violation: bool
    reason: str = ""


OK = PairingCheck(violation=False)


def _valid_group_of(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def check_violation(candidate: Student, current_occupants: list[Student], capacity: int) -> PairingCheck:
    """Check whether adding a candidate to a slot breaks a pairing rule.

    Rules, in order:
    1. Capacity must not be exceeded.
    2. A solo student is always alone.
    3. A pair never exceeds two students.
    4. Group students (3+) never join solo or paired students.
    5. Candidate's sub-group must match the established one (no sub-group
       always matches).

    Malformed input is reported as a violation, never raised.

    Args:
        candidate: Student to add
        current_occupants: Students already in the slot
        capacity: Effective capacity of the slot

    Returns:
        PairingCheck with the first violated rule's reason
    """
    if candidate is None or not _valid_group_of(getattr(candidate, "group_of", None)):
        return PairingCheck(True, "Invalid candidate data: missing or invalid group size.")
    if not isinstance(current_occupants, (list, tuple)):
        return PairingCheck(True, "Invalid current occupants data.")
    if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity < 1:
        return PairingCheck(True, f"Invalid slot capacity ({capacity!r}).")

    total = len(current_occupants) + 1
    if total > capacity:
        return PairingCheck(True, f"Slot capacity ({capacity}) would be exceeded.")

    # Occupants with a malformed group size count as solo
    occupant_sizes = [
        occ.group_of if occ is not None and _valid_group_of(occ.group_of) else SOLO
        for occ in current_occupants
    ]
    sizes = [*occupant_sizes, candidate.group_of]

    if SOLO in sizes and total > 1:
        return PairingCheck(True, "Solo lessons cannot have other students.")

    if PAIRED in sizes and total > 2:
        return PairingCheck(True, "Paired lessons cannot exceed 2 students.")

    if candidate.group_of > PAIRED and (SOLO in occupant_sizes or PAIRED in occupant_sizes):
        return PairingCheck(True, "Group students cannot join a solo or paired lesson.")

    established = established_sub_group(current_occupants)
    if established is not None and candidate.sub_group and candidate.sub_group != established:
        return PairingCheck(
            True,
            f"Cannot mix sub-groups ('{candidate.sub_group}' vs existing '{established}').",
        )

    return OK
