"""Normalisation of raw source records into canonical models.

The hosted database and older exports spell fields differently
("Name" vs "name", "lessons owed" vs "lessons_owed"). All variants are
resolved here, once, so the engine only ever sees canonical models.
"""

import re

from .constants import (
    BLOCK_FIELD_ALIASES,
    DEFAULT_CAPACITY,
    SLOT_FIELD_ALIASES,
    STATUS_FIELD_ALIASES,
    STUDENT_FIELD_ALIASES,
)
from .exceptions import InvalidRecordError
from .models import DailyBlock, DailyStatus, Slot, Student, StudentId
from .utils import is_missing, normalize_time, safe_int, safe_str

TRUE_VALUES = {"true", "t", "yes", "y", "1"}
FALSE_VALUES = {"false", "f", "no", "n", "0"}
ID_LIST_SEPARATOR = re.compile(r"[,;]")


def pick(record: dict, aliases: list[str], default=None):
    """Return the first non-missing value among the alias keys."""
    for key in aliases:
        if key in record and not is_missing(record[key]):
            return record[key]
    return default


def normalize_id(value) -> StudentId | None:
    """Normalise an identifier: integral values become int, others stripped str."""
    if is_missing(value) or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else str(value)
    text = str(value).strip()
    if not text:
        return None
    if re.fullmatch(r"-?\d+", text):
        return int(text)
    return text


def normalize_id_list(value) -> list[StudentId]:
    """Normalise a list of ids (or a comma/semicolon separated string)."""
    if is_missing(value):
        return []
    if isinstance(value, str):
        items = ID_LIST_SEPARATOR.split(value)
    else:
        items = list(value)

    ids: list[StudentId] = []
    for item in items:
        normalized = normalize_id(item)
        if normalized is not None and normalized not in ids:
            ids.append(normalized)
    return ids


def normalize_bool(value, default: bool = True) -> bool:
    """Normalise a boolean flag from bool, number or text."""
    if is_missing(value):
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    return default


def normalize_group_of(value) -> int:
    """Normalise group size; anything missing or below 1 means solo."""
    group_of = safe_int(value, default=1)
    return group_of if group_of >= 1 else 1


def normalize_student_record(
    record: dict,
    index: int | None = None,
    source: str | None = None,
) -> Student:
    """Convert a raw roster record into a Student.

    Args:
        record: Raw record from the roster source
        index: Position of the record (for error messages)
        source: Source name (for error messages)

    Returns:
        Student in canonical shape

    Raises:
        InvalidRecordError: If the record has no usable id
    """
    if not isinstance(record, dict):
        raise InvalidRecordError("record is not a mapping", source=source, index=index)

    student_id = normalize_id(pick(record, STUDENT_FIELD_ALIASES["id"]))
    if student_id is None:
        raise InvalidRecordError("student record has no id", source=source, index=index)

    return Student.from_dict(
        {
            "id": student_id,
            "name": safe_str(pick(record, STUDENT_FIELD_ALIASES["name"]), default="Unknown Student"),
            "group_of": normalize_group_of(pick(record, STUDENT_FIELD_ALIASES["group_of"])),
            "sub_group": safe_str(pick(record, STUDENT_FIELD_ALIASES["sub_group"])),
            "lessons_owed": safe_int(pick(record, STUDENT_FIELD_ALIASES["lessons_owed"]), default=0),
            "availability_string": safe_str(pick(record, STUDENT_FIELD_ALIASES["availability_string"])),
            "class_name": safe_str(pick(record, STUDENT_FIELD_ALIASES["class_name"])),
            "is_active": normalize_bool(pick(record, STUDENT_FIELD_ALIASES["is_active"]), default=True),
        }
    )


def normalize_slot_record(
    record: dict,
    index: int | None = None,
    source: str | None = None,
) -> Slot:
    """Convert a raw slot record into a Slot.

    The slot date is carried as given (possibly None); callers that check
    blocks must reject slots without a date.

    Raises:
        InvalidRecordError: If the record has no schedule id
    """
    if not isinstance(record, dict):
        raise InvalidRecordError("record is not a mapping", source=source, index=index)

    schedule_id = normalize_id(pick(record, SLOT_FIELD_ALIASES["schedule_id"]))
    if schedule_id is None:
        raise InvalidRecordError("slot record has no schedule_id", source=source, index=index)

    raw_time = pick(record, SLOT_FIELD_ALIASES["start_time"])
    start_time = normalize_time(raw_time) or safe_str(raw_time, default="")

    capacity = safe_int(pick(record, SLOT_FIELD_ALIASES["capacity"]), default=DEFAULT_CAPACITY)
    if capacity < 1:
        capacity = DEFAULT_CAPACITY

    current = pick(record, SLOT_FIELD_ALIASES["current_occupant_ids"])
    day = safe_str(pick(record, SLOT_FIELD_ALIASES["day_of_week"]), default="")

    return Slot.from_dict(
        {
            "schedule_id": schedule_id,
            "day_of_week": day.capitalize(),
            "start_time": start_time,
            "capacity": capacity,
            "coach_id": safe_int(pick(record, SLOT_FIELD_ALIASES["coach_id"]), default=0),
            "coach_name": safe_str(pick(record, SLOT_FIELD_ALIASES["coach_name"]), default=""),
            "original_student_ids": normalize_id_list(
                pick(record, SLOT_FIELD_ALIASES["original_student_ids"])
            ),
            "current_occupant_ids": normalize_id_list(current) if current is not None else None,
            "slot_date": safe_str(pick(record, SLOT_FIELD_ALIASES["slot_date"])),
        }
    )


def normalize_block_record(
    record: dict,
    index: int | None = None,
    source: str | None = None,
) -> DailyBlock:
    """Convert a raw block record into a DailyBlock.

    Raises:
        InvalidRecordError: If the record has no block date
    """
    if not isinstance(record, dict):
        raise InvalidRecordError("record is not a mapping", source=source, index=index)

    block_date = safe_str(pick(record, BLOCK_FIELD_ALIASES["block_date"]))
    if block_date is None:
        raise InvalidRecordError("block record has no block_date", source=source, index=index)

    return DailyBlock.from_dict(
        {
            "block_date": block_date,
            "block_type": safe_str(pick(record, BLOCK_FIELD_ALIASES["block_type"])),
            "identifier": safe_str(pick(record, BLOCK_FIELD_ALIASES["identifier"])),
            "reason": safe_str(pick(record, BLOCK_FIELD_ALIASES["reason"])),
        }
    )


def normalize_status_record(
    record: dict,
    index: int | None = None,
    source: str | None = None,
) -> DailyStatus:
    """Convert a raw daily status record into a DailyStatus.

    Raises:
        InvalidRecordError: If a required field is missing
    """
    if not isinstance(record, dict):
        raise InvalidRecordError("record is not a mapping", source=source, index=index)

    student_id = normalize_id(pick(record, STATUS_FIELD_ALIASES["student_id"]))
    schedule_id = normalize_id(pick(record, STATUS_FIELD_ALIASES["schedule_id"]))
    status_date = safe_str(pick(record, STATUS_FIELD_ALIASES["status_date"]))
    status = safe_str(pick(record, STATUS_FIELD_ALIASES["status"]))
    if None in (student_id, schedule_id, status_date, status):
        raise InvalidRecordError(
            "status record needs student_id, schedule_id, status_date and status",
            source=source,
            index=index,
        )

    return DailyStatus(
        student_id=student_id,
        schedule_id=schedule_id,
        status_date=status_date,
        status=status,
    )
