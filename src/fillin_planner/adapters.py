"""Entry points that run the engine over fetched data.

Two adapters share the same engine:
- BatchFillInAdapter: every slot needing fill-ins, optionally filtered by
  coach and day (the admin "find suggestions" path).
- SingleSlotAdapter: one slot on one date (the absence-replacement path).
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace

from .availability import AvailabilityCache
from .engine import (
    FilterStats,
    apply_statuses,
    blocks_for_dates,
    check_violation,
    effective_capacity,
    filter_candidates,
    lookup_students,
    rank_candidates,
    recommend,
    require_slot_date,
)
from .exceptions import UnknownOccupantError
from .models import (
    DailyBlock,
    DailyStatus,
    FillInReport,
    FillInStatistics,
    RecommendedGroupMember,
    Slot,
    SlotRecommendation,
    Student,
)
from .utils import normalize_day

logger = logging.getLogger(__name__)


@dataclass
class PreparedSlot:
    """A slot with its occupants resolved against the roster."""

    slot: Slot
    originals: list[Student]
    occupants: list[Student]
    capacity: int

    @property
    def needed(self) -> int:
        return self.capacity - len(self.slot.occupant_ids)


@dataclass
class SingleSlotSuggestion:
    """Ranked fill-in candidates for one slot on one date."""

    slot: Slot
    effective_capacity: int
    candidates: list[RecommendedGroupMember] = field(default_factory=list)
    stats: FilterStats = field(default_factory=FilterStats)
    skipped_pairing: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "slot": self.slot.to_dict(),
            "effective_capacity": self.effective_capacity,
            "candidates": [c.to_dict() for c in self.candidates],
            "skipped": {**self.stats.to_dict(), "pairing": self.skipped_pairing},
        }


class _EngineAdapter:
    """Shared roster lookup and slot preparation."""

    def __init__(
        self,
        students: Sequence[Student],
        blocks: Sequence[DailyBlock] = (),
        statuses: Sequence[DailyStatus] = (),
    ):
        """
        Initialize adapter.

        Args:
            students: Normalised roster
            blocks: Daily blocks for the dates of interest
            statuses: Daily attendance statuses (absences, assigned fill-ins)
        """
        self.students = list(students)
        self.blocks = list(blocks)
        self.statuses = list(statuses)
        self._by_id = {student.id: student for student in self.students}

    def prepare(self, slot: Slot) -> PreparedSlot:
        """Resolve a slot's occupants and effective capacity.

        Raises:
            MissingSlotDateError: If the slot has no date
            UnknownOccupantError: If a current occupant is not on the roster
        """
        require_slot_date(slot)
        slot = apply_statuses(slot, self.statuses)
        unknown = [sid for sid in slot.occupant_ids if sid not in self._by_id]
        if unknown:
            raise UnknownOccupantError(slot.schedule_id, unknown)
        originals = lookup_students(slot.original_student_ids, self._by_id)
        occupants = lookup_students(slot.occupant_ids, self._by_id)
        capacity = effective_capacity(slot.capacity, originals)
        return PreparedSlot(slot=slot, originals=originals, occupants=occupants, capacity=capacity)


class BatchFillInAdapter(_EngineAdapter):
    """Recommend fill-in groups for every slot that needs them."""

    def run(
        self,
        slots: Iterable[Slot],
        coach_id: int | None = None,
        day: str | None = None,
        include_partial: bool = False,
    ) -> FillInReport:
        """Build recommendations for a batch of slots.

        Args:
            slots: Candidate slots (each must carry a slot_date)
            coach_id: Only slots owned by this coach
            day: Only slots on this day of the week
            include_partial: Also fill slots that still have some occupants;
                by default only slots left empty are filled

        Returns:
            FillInReport with one entry per slot that needed fill-ins
            and statistics; slots whose occupants are not on the roster are
            skipped and counted in slots_skipped

        Raises:
            MissingSlotDateError: If a selected slot has no date
        """
        target_day = normalize_day(day) if day else None
        selected = [
            slot
            for slot in slots
            if (coach_id is None or slot.coach_id == coach_id)
            and (target_day is None or normalize_day(slot.day_of_week) == target_day)
        ]
        logger.info(
            f"Batch request: coach={coach_id}, day={day}, include_partial={include_partial}, "
            f"{len(selected)} slots selected"
        )

        report = FillInReport()
        stats: FillInStatistics = report.statistics
        stats.slots_considered = len(selected)
        if not selected:
            logger.info("No slots found needing fill-ins")
            return report

        prepared: list[PreparedSlot] = []
        for slot in selected:
            try:
                prepared.append(self.prepare(slot))
            except UnknownOccupantError as e:
                logger.warning(f"{e}, skipping")
                stats.slots_skipped += 1
        if not prepared:
            return report

        blocks = blocks_for_dates(self.blocks, {p.slot.slot_date for p in prepared})
        stats.blocks_considered = len(blocks)
        stats.candidate_pool_size = sum(
            1 for s in self.students if s.lessons_owed > 0 and s.is_active
        )
        logger.info(
            f"Using {len(blocks)} blocks and {stats.candidate_pool_size} potential candidates"
        )

        cache = AvailabilityCache()
        for item in prepared:
            if not include_partial and item.slot.occupant_ids:
                logger.debug(f"Slot {item.slot.schedule_id}: still occupied, skipping")
                continue
            if item.needed <= 0:
                logger.debug(f"Slot {item.slot.schedule_id}: full, skipping")
                continue

            filter_stats = FilterStats()
            pool = filter_candidates(
                self.students, item.slot, blocks, item.occupants, cache, filter_stats
            )
            group = recommend(item.slot, pool, item.occupants, item.capacity)
            logger.debug(
                f"Slot {item.slot.schedule_id}: {len(pool)} eligible, "
                f"{len(group)}/{item.needed} recommended, skipped {filter_stats.to_dict()}"
            )

            report.results.append(
                SlotRecommendation(
                    slot=item.slot,
                    effective_capacity=item.capacity,
                    needed_count=item.needed,
                    recommended_group=group,
                )
            )
            stats.slots_processed += 1
            stats.total_recommended += len(group)
            if group:
                stats.slots_with_recommendations += 1

        logger.info(
            f"Finished processing. {stats.slots_processed} slots, "
            f"{stats.total_recommended} students recommended"
        )
        return report


class SingleSlotAdapter(_EngineAdapter):
    """Fill-in candidates for a single slot on a single date."""

    def _with_date(self, slot: Slot, target_date: str | None) -> Slot:
        if target_date and target_date != slot.slot_date:
            # A different date invalidates occupants resolved for the old one
            return replace(slot, slot_date=target_date, current_occupant_ids=None)
        return slot

    def suggest(self, slot: Slot, target_date: str | None = None) -> SingleSlotSuggestion:
        """List every eligible replacement, ranked by lessons owed.

        Unlike recommend(), the list is not cut at the number of free places;
        each candidate has been checked against the pairing rules on its own.

        Args:
            slot: Slot to fill
            target_date: Date to evaluate; defaults to the slot's date

        Returns:
            SingleSlotSuggestion with candidates and skip counts

        Raises:
            MissingSlotDateError: If neither the slot nor target_date gives a date
            UnknownOccupantError: If a current occupant is not on the roster
        """
        item = self.prepare(self._with_date(slot, target_date))
        stats = FilterStats()
        pool = filter_candidates(
            self.students, item.slot, self.blocks, item.occupants, AvailabilityCache(), stats
        )

        suggestion = SingleSlotSuggestion(
            slot=item.slot, effective_capacity=item.capacity, stats=stats
        )
        for candidate in rank_candidates(pool):
            check = check_violation(candidate, item.occupants, item.capacity)
            if check.violation:
                logger.debug(f"Candidate {candidate.id} rejected: {check.reason}")
                suggestion.skipped_pairing += 1
                continue
            suggestion.candidates.append(RecommendedGroupMember.from_student(candidate))

        logger.info(
            f"Slot {item.slot.schedule_id} on {item.slot.slot_date}: "
            f"{len(suggestion.candidates)} candidates, skipped {stats.to_dict()}, "
            f"pairing {suggestion.skipped_pairing}"
        )
        return suggestion

    def recommend(self, slot: Slot, target_date: str | None = None) -> SlotRecommendation:
        """Greedy fill-in group for one slot.

        Raises:
            MissingSlotDateError: If neither the slot nor target_date gives a date
            UnknownOccupantError: If a current occupant is not on the roster
        """
        item = self.prepare(self._with_date(slot, target_date))
        pool = filter_candidates(
            self.students, item.slot, self.blocks, item.occupants, AvailabilityCache()
        )
        group = recommend(item.slot, pool, item.occupants, item.capacity)
        return SlotRecommendation(
            slot=item.slot,
            effective_capacity=item.capacity,
            needed_count=max(item.needed, 0),
            recommended_group=group,
        )
