"""Data models for the fill-in planner."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Self


StudentId = int | str


class BlockType(str, Enum):
    """Kinds of date-scoped blocks."""

    PUBLIC_HOLIDAY = "PublicHoliday"
    YEAR_LEVEL_ABSENCE = "YearLevelAbsence"
    CLASS_ABSENCE = "ClassAbsence"
    COACH_UNAVAILABLE = "CoachUnavailable"
    OTHER = "Other"

    @classmethod
    def parse(cls, label: str | None) -> "BlockType":
        """Parse a block type label.

        Accepts both the compact form ("PublicHoliday") and the spaced form
        stored by the database ("Public Holiday"). Unknown labels map to OTHER.

        Args:
            label: Raw block type label

        Returns:
            BlockType member
        """
        if not label:
            return cls.OTHER
        compact = "".join(str(label).split()).lower()
        for member in cls:
            if member.value.lower() == compact:
                return member
        return cls.OTHER


@dataclass
class Student:
    """A student on the roster, in canonical shape.

    Attributes:
        id: Unique identifier
        name: Display name
        group_of: 1 = solo, 2 = paired, 3+ = group lesson size
        sub_group: Optional tag for students scheduled together
        lessons_owed: Makeup lessons due (priority for fill-ins)
        availability_string: Raw weekly availability text
        class_name: School class, used for year-level/class blocks
        is_active: Inactive students are never offered as candidates
    """

    id: StudentId
    name: str
    group_of: int = 1
    sub_group: str | None = None
    lessons_owed: int = 0
    availability_string: str | None = None
    class_name: str | None = None
    is_active: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a Student from a dictionary with canonical keys."""
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            group_of=data.get("group_of", 1),
            sub_group=data.get("sub_group"),
            lessons_owed=data.get("lessons_owed", 0),
            availability_string=data.get("availability_string"),
            class_name=data.get("class_name"),
            is_active=data.get("is_active", True),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "group_of": self.group_of,
            "sub_group": self.sub_group,
            "lessons_owed": self.lessons_owed,
            "availability_string": self.availability_string,
            "class_name": self.class_name,
            "is_active": self.is_active,
        }


@dataclass
class Slot:
    """One lesson slot instance that may need fill-ins.

    Attributes:
        schedule_id: Unique identifier of the recurring slot
        day_of_week: Day name (Monday-Sunday)
        start_time: Start time, HH:MM
        capacity: Stored capacity
        coach_id: Coach who owns the slot
        coach_name: Coach display name
        original_student_ids: Students on the recurring roster
        current_occupant_ids: Students present on slot_date, None means
            the original roster is unchanged
        slot_date: Concrete date (YYYY-MM-DD) of this instance
    """

    schedule_id: int | str
    day_of_week: str
    start_time: str
    capacity: int
    coach_id: int
    coach_name: str = ""
    original_student_ids: list[StudentId] = field(default_factory=list)
    current_occupant_ids: list[StudentId] | None = None
    slot_date: str | None = None

    @property
    def occupant_ids(self) -> list[StudentId]:
        """Students actually occupying the slot for its date."""
        if self.current_occupant_ids is None:
            return list(self.original_student_ids)
        return list(self.current_occupant_ids)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a Slot from a dictionary with canonical keys."""
        current = data.get("current_occupant_ids")
        return cls(
            schedule_id=data["schedule_id"],
            day_of_week=data.get("day_of_week", ""),
            start_time=data.get("start_time", ""),
            capacity=data.get("capacity", 1),
            coach_id=data.get("coach_id", 0),
            coach_name=data.get("coach_name", ""),
            original_student_ids=list(data.get("original_student_ids") or []),
            current_occupant_ids=list(current) if current is not None else None,
            slot_date=data.get("slot_date"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "schedule_id": self.schedule_id,
            "day_of_week": self.day_of_week,
            "start_time": self.start_time,
            "capacity": self.capacity,
            "coach_id": self.coach_id,
            "coach_name": self.coach_name,
            "original_student_ids": self.original_student_ids,
            "current_occupant_ids": self.occupant_ids,
            "slot_date": self.slot_date,
        }


@dataclass
class DailyBlock:
    """A date-scoped rule that prevents attendance."""

    block_date: str
    block_type: BlockType
    identifier: str | None = None
    reason: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a DailyBlock from a dictionary with canonical keys."""
        return cls(
            block_date=data["block_date"],
            block_type=BlockType.parse(data.get("block_type")),
            identifier=data.get("identifier"),
            reason=data.get("reason"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "block_date": self.block_date,
            "block_type": self.block_type.value,
            "identifier": self.identifier,
            "reason": self.reason,
        }


@dataclass
class DailyStatus:
    """Attendance status of one student in one slot on one date."""

    student_id: StudentId
    schedule_id: int | str
    status_date: str
    status: str


@dataclass(frozen=True)
class RecommendedGroupMember:
    """Snapshot of a recommended fill-in student."""

    student_id: StudentId
    name: str
    lessons_owed: int
    group_of: int
    sub_group: str | None

    @classmethod
    def from_student(cls, student: Student) -> Self:
        """Take a snapshot of a student."""
        return cls(
            student_id=student.id,
            name=student.name,
            lessons_owed=student.lessons_owed,
            group_of=student.group_of,
            sub_group=student.sub_group,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "student_id": self.student_id,
            "name": self.name,
            "lessons_owed": self.lessons_owed,
            "group_of": self.group_of,
            "sub_group": self.sub_group,
        }


@dataclass
class SlotRecommendation:
    """Recommendation for one slot: slot fields plus the ranked group."""

    slot: Slot
    effective_capacity: int
    needed_count: int
    recommended_group: list[RecommendedGroupMember] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, flattening the slot fields."""
        data = self.slot.to_dict()
        data["effective_capacity"] = self.effective_capacity
        data["needed_count"] = self.needed_count
        data["recommended_group"] = [m.to_dict() for m in self.recommended_group]
        return data


@dataclass
class FillInStatistics:
    """Statistics about a batch recommendation run."""

    slots_considered: int = 0
    slots_processed: int = 0
    slots_with_recommendations: int = 0
    total_recommended: int = 0
    candidate_pool_size: int = 0
    blocks_considered: int = 0
    slots_skipped: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "slots_considered": self.slots_considered,
            "slots_processed": self.slots_processed,
            "slots_with_recommendations": self.slots_with_recommendations,
            "total_recommended": self.total_recommended,
            "candidate_pool_size": self.candidate_pool_size,
            "blocks_considered": self.blocks_considered,
            "slots_skipped": self.slots_skipped,
        }


@dataclass
class FillInReport:
    """Result of a batch recommendation run."""

    results: list[SlotRecommendation] = field(default_factory=list)
    statistics: FillInStatistics = field(default_factory=FillInStatistics)
    generation_date: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def total_slots(self) -> int:
        """Number of slots with a recommendation entry."""
        return len(self.results)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "generation_date": self.generation_date,
            "results": [r.to_dict() for r in self.results],
            "statistics": self.statistics.to_dict(),
        }
