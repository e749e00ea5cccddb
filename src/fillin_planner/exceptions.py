"""Custom exceptions for the fill-in planner."""


class FillInError(Exception):
    """Base exception for fill-in planner errors."""

    pass


class MissingSlotDateError(FillInError):
    """Slot has no concrete date, so blocks cannot be checked."""

    def __init__(self, schedule_id):
        self.schedule_id = schedule_id
        super().__init__(
            f"Slot {schedule_id} has no slot_date. "
            "A concrete date (YYYY-MM-DD) is required to check daily blocks."
        )


class InvalidRecordError(FillInError):
    """A raw source record could not be normalised."""

    def __init__(self, message: str, source: str | None = None, index: int | None = None):
        self.source = source
        self.index = index
        location = ""
        if source:
            location += f" in {source}"
        if index is not None:
            location += f" at record {index}"
        super().__init__(f"Invalid record{location}: {message}")


class SourceNotFoundError(FillInError):
    """A required data file is missing."""

    def __init__(self, name: str, searched: list[str] | None = None):
        self.name = name
        self.searched = searched or []
        message = f"No {name} source found"
        if self.searched:
            message += f". Looked for: {', '.join(self.searched)}"
        super().__init__(message)


class UnsupportedFormatError(FillInError):
    """File suffix or export format is not supported."""

    def __init__(self, value: str, supported: list[str]):
        self.value = value
        self.supported = supported
        super().__init__(
            f"Unsupported format '{value}'. Supported: {', '.join(supported)}"
        )


class UnknownOccupantError(FillInError):
    """A slot's current occupant is not on the roster."""

    def __init__(self, schedule_id, student_ids: list):
        self.schedule_id = schedule_id
        self.student_ids = student_ids
        super().__init__(
            f"Slot {schedule_id} has occupants not on the roster: "
            f"{', '.join(str(sid) for sid in student_ids)}"
        )
