"""Slot loader."""

import logging
from pathlib import Path

from ..exceptions import InvalidRecordError
from ..models import Slot
from ..normalization import normalize_slot_record
from .records import read_records

logger = logging.getLogger(__name__)


class SlotConfig:
    """Loader for slots needing fill-ins (slots.json)."""

    def __init__(self, path: Path | None = None):
        self.path = path
        self._slots: list[Slot] = []
        self.skipped: list[str] = []

        if path and path.exists():
            self._load(path)

    def _load(self, path: Path) -> None:
        for index, record in enumerate(read_records(path, key="slots")):
            try:
                self._slots.append(normalize_slot_record(record, index=index, source=path.name))
            except InvalidRecordError as e:
                logger.warning(str(e))
                self.skipped.append(str(e))

        logger.info(f"Loaded {len(self._slots)} slots from {path}")

    @property
    def slots(self) -> list[Slot]:
        """All slots, in file order."""
        return list(self._slots)

    def get(self, schedule_id) -> Slot | None:
        """Find a slot by schedule id."""
        for slot in self._slots:
            if slot.schedule_id == schedule_id:
                return slot
        return None

    def dates(self) -> set[str]:
        """Distinct slot dates."""
        return {slot.slot_date for slot in self._slots if slot.slot_date}

    def without_date(self) -> list[Slot]:
        """Slots that cannot be evaluated because they carry no date."""
        return [slot for slot in self._slots if not slot.slot_date]
