"""Utility functions for the fill-in planner."""

import re

import pandas as pd

from .constants import GROUP_LABEL, GROUP_SIZE_LABELS, UNKNOWN_GROUP_LABEL, VALID_DAYS

# Accepted time layouts, tried in order. Groups: hours, minutes, period.
# Seconds are matched but discarded.
TIME_PATTERNS = [
    re.compile(r"^(\d{1,2}):(\d{2}):\d{2}\s*(am|pm)?$"),
    re.compile(r"^(\d{1,2}):(\d{2})\s*(am|pm)?$"),
    re.compile(r"^(\d{2})(\d{2})\s*(am|pm)?$"),
    re.compile(r"^(\d{1,2})()\s*(am|pm)$"),
]


def is_missing(value) -> bool:
    """Check if a scalar value is None/NaN/NA."""
    if value is None:
        return True
    if pd.api.types.is_scalar(value):
        return bool(pd.isna(value))
    return False


def parse_time(time_string) -> tuple[int, int] | None:
    """Parse a time string into (hours, minutes).

    Accepts HH:MM, H:MM, HH:MM:SS, HHMM and a bare hour, each with an
    optional am/pm suffix. 12am is midnight, 12pm is noon.

    Args:
        time_string: Raw time text

    Returns:
        Tuple of (hours, minutes), or None if the text is not a valid time
    """
    if not isinstance(time_string, str):
        return None

    text = time_string.strip().lower()
    for pattern in TIME_PATTERNS:
        match = pattern.match(text)
        if match:
            break
    else:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2)) if match.group(2) else 0
    period = match.group(3)

    if period == "pm" and 1 <= hours <= 11:
        hours += 12
    elif period == "am" and hours == 12:
        hours = 0

    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        return None
    return hours, minutes


def format_time(hours: int, minutes: int) -> str:
    """Format hours and minutes as HH:MM."""
    return f"{hours:02d}:{minutes:02d}"


def normalize_time(time_string) -> str | None:
    """Normalize a time string to HH:MM (seconds dropped).

    Returns:
        HH:MM string, or None if the time cannot be parsed
    """
    parsed = parse_time(time_string)
    if parsed is None:
        return None
    return format_time(*parsed)


def normalize_day(day) -> str | None:
    """Normalize a day name to lower case, or None if it is not a weekday name."""
    if not isinstance(day, str):
        return None
    cleaned = day.strip().lower()
    return cleaned if cleaned in VALID_DAYS else None


def safe_int(value, default: int = 0) -> int:
    """Safely convert a value to integer.

    Args:
        value: Value to convert
        default: Default value if conversion fails

    Returns:
        Integer value
    """
    if is_missing(value) or isinstance(value, bool):
        return default
    try:
        return int(float(value))
    except (ValueError, TypeError):
        return default


def safe_str(value, default: str | None = None) -> str | None:
    """Safely convert a value to a stripped string.

    Empty strings are treated as missing.
    """
    if is_missing(value):
        return default
    text = str(value).strip()
    return text if text else default


def group_size_text(group_of) -> str:
    """Describe a group size: Solo, Paired, Group or N/A."""
    if not isinstance(group_of, int) or isinstance(group_of, bool) or group_of < 1:
        return UNKNOWN_GROUP_LABEL
    return GROUP_SIZE_LABELS.get(group_of, GROUP_LABEL)
