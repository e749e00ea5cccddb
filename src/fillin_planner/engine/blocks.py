"""Date-scoped blocks: holidays, class absences and coach unavailability."""

from collections.abc import Iterable

from ..models import BlockType, DailyBlock, Student


def _coach_matches(identifier: str | None, coach_id) -> bool:
    """Check if a block identifier names the coach (integer comparison)."""
    if not identifier:
        return False
    try:
        return int(identifier.strip()) == int(coach_id)
    except (TypeError, ValueError):
        return False


def block_applies(block: DailyBlock, student: Student, coach_id) -> bool:
    """Check if one block (already known to be on the right date) applies."""
    class_name = student.class_name

    if block.block_type == BlockType.PUBLIC_HOLIDAY:
        return True
    elif block.block_type == BlockType.YEAR_LEVEL_ABSENCE:
        # Prefix match: "Year 7" catches "Year 7A", "Year 7B"
        return bool(block.identifier and class_name and class_name.startswith(block.identifier))
    elif block.block_type == BlockType.CLASS_ABSENCE:
        return bool(block.identifier and class_name and class_name == block.identifier)
    elif block.block_type == BlockType.COACH_UNAVAILABLE:
        return _coach_matches(block.identifier, coach_id)
    else:  # OTHER is informational
        return False


def find_blocking(
    student: Student,
    date: str,
    coach_id,
    blocks: Iterable[DailyBlock],
) -> DailyBlock | None:
    """Return the first block that keeps a student out of a coach's slot on a date."""
    if student is None or not date or blocks is None:
        return None
    for block in blocks:
        if block.block_date != date:
            continue
        if block_applies(block, student, coach_id):
            return block
    return None


def is_blocked(
    student: Student,
    date: str,
    coach_id,
    blocks: Iterable[DailyBlock],
) -> bool:
    """Check whether a student is blocked from a coach's slot on a date.

    Blocks on other dates are ignored even if the caller passes them.

    Args:
        student: Student to check
        date: Slot date (YYYY-MM-DD)
        coach_id: Coach owning the slot
        blocks: Daily blocks

    Returns:
        True if any block on that date applies
    """
    return find_blocking(student, date, coach_id, blocks) is not None


def blocks_for_dates(blocks: Iterable[DailyBlock], dates: Iterable[str]) -> list[DailyBlock]:
    """Narrow a block list to the given dates, keeping order."""
    wanted = set(dates)
    return [block for block in blocks if block.block_date in wanted]
