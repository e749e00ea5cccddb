"""Weekly availability parsing and point-in-time queries.

Availability strings look like::

    Monday: 09:00-10:00; 15:30
    Tuesday: 4pm
    Wednesday: 1430; Thursday: 9:15 am

Entries are separated by newlines or semicolons. An entry without a day name
continues the most recently seen day. Each time spec is either a single time
or a "start-end" range, which expands to 30-minute steps (both ends included).
Anything that cannot be parsed is skipped.
"""

import re

from .constants import AVAILABILITY_STEP_MINUTES, VALID_DAYS
from .models import Student, StudentId
from .utils import format_time, normalize_day, normalize_time, parse_time

ParsedAvailability = dict[str, frozenset[str]]

ENTRY_SEPARATOR = re.compile(r"[\n;]")
TIME_SEPARATOR = re.compile(r",")
DAY_PREFIX = re.compile(
    r"^(" + "|".join(VALID_DAYS) + r")\s*:\s*(.*)$",
    re.IGNORECASE | re.DOTALL,
)


def expand_range(start_text: str, end_text: str) -> list[str]:
    """Expand a time range into HH:MM points at 30-minute steps.

    Args:
        start_text: Range start
        end_text: Range end

    Returns:
        Times from start through end inclusive; empty if either end is
        invalid or start is not strictly before end
    """
    start = parse_time(start_text)
    end = parse_time(end_text)
    if start is None or end is None:
        return []

    start_minutes = start[0] * 60 + start[1]
    end_minutes = end[0] * 60 + end[1]
    if start_minutes >= end_minutes:
        return []

    return [
        format_time(*divmod(minute, 60))
        for minute in range(start_minutes, end_minutes + 1, AVAILABILITY_STEP_MINUTES)
    ]


def parse_time_spec(spec: str) -> list[str]:
    """Parse one time spec (single time or range) into HH:MM points."""
    spec = spec.strip()
    if not spec:
        return []

    if "-" in spec:
        parts = spec.split("-")
        if len(parts) != 2:
            return []
        return expand_range(parts[0], parts[1])

    time = normalize_time(spec)
    return [time] if time else []


def parse_availability(availability_string: str | None) -> ParsedAvailability:
    """Parse a weekly availability string.

    Args:
        availability_string: Raw availability text (may be None)

    Returns:
        Mapping of lower-case day name to the set of available HH:MM times.
        Days without any valid time are omitted.
    """
    if not availability_string or not isinstance(availability_string, str):
        return {}

    collected: dict[str, set[str]] = {}
    current_day: str | None = None

    for entry in ENTRY_SEPARATOR.split(availability_string):
        entry = entry.strip()
        if not entry:
            continue

        match = DAY_PREFIX.match(entry)
        if match:
            current_day = match.group(1).lower()
            time_part = match.group(2)
        elif current_day is not None:
            time_part = entry
        else:
            continue

        for spec in TIME_SEPARATOR.split(time_part):
            times = parse_time_spec(spec)
            if times:
                collected.setdefault(current_day, set()).update(times)

    return {day: frozenset(times) for day, times in collected.items()}


class AvailabilityCache:
    """Memoised parsed availability, keyed by student id.

    One cache belongs to one recommendation pass, so a student considered
    for many slots is parsed once.
    """

    def __init__(self) -> None:
        self._parsed: dict[StudentId, ParsedAvailability] = {}
        self.hits = 0
        self.misses = 0

    def get(self, student: Student) -> ParsedAvailability:
        """Get parsed availability for a student, parsing on first use."""
        parsed = self._parsed.get(student.id)
        if parsed is None:
            self.misses += 1
            parsed = parse_availability(student.availability_string)
            self._parsed[student.id] = parsed
        else:
            self.hits += 1
        return parsed

    def __len__(self) -> int:
        return len(self._parsed)

    def __contains__(self, student_id: object) -> bool:
        return student_id in self._parsed


def is_available(
    student: Student,
    day: str,
    time: str,
    cache: AvailabilityCache | None = None,
) -> bool:
    """Check whether a student is available at a day and time.

    Fails closed: missing availability, an unknown day or an unparseable
    time all mean "not available".

    Args:
        student: Student to check
        day: Day name (case-insensitive)
        time: Time of day; seconds are ignored
        cache: Optional cache shared across one recommendation pass

    Returns:
        True if the normalised time is in the student's set for that day
    """
    if student is None:
        return False

    target_day = normalize_day(day)
    target_time = normalize_time(time)
    if target_day is None or target_time is None:
        return False

    if cache is not None:
        parsed = cache.get(student)
    else:
        parsed = parse_availability(student.availability_string)

    return target_time in parsed.get(target_day, frozenset())


def format_availability(parsed: ParsedAvailability) -> list[str]:
    """Format parsed availability as readable "Day: t1, t2" lines."""
    lines = []
    for day in VALID_DAYS:
        times = parsed.get(day)
        if times:
            lines.append(f"{day.capitalize()}: {', '.join(sorted(times))}")
    return lines
