"""Daily block and daily status loaders."""

import logging
from pathlib import Path

from ..engine import blocks_for_dates
from ..exceptions import InvalidRecordError
from ..models import DailyBlock, DailyStatus
from ..normalization import normalize_block_record, normalize_status_record
from .records import read_records

logger = logging.getLogger(__name__)


class BlockConfig:
    """Loader for daily blocks (blocks.json or blocks.csv)."""

    def __init__(self, path: Path | None = None):
        self.path = path
        self._blocks: list[DailyBlock] = []
        self.skipped: list[str] = []

        if path and path.exists():
            self._load(path)

    def _load(self, path: Path) -> None:
        for index, record in enumerate(read_records(path, key="blocks")):
            try:
                self._blocks.append(normalize_block_record(record, index=index, source=path.name))
            except InvalidRecordError as e:
                logger.warning(str(e))
                self.skipped.append(str(e))

        logger.info(f"Loaded {len(self._blocks)} daily blocks from {path}")

    @property
    def blocks(self) -> list[DailyBlock]:
        """All blocks, in file order."""
        return list(self._blocks)

    def dates(self) -> set[str]:
        """Distinct block dates."""
        return {block.block_date for block in self._blocks}

    def for_dates(self, dates) -> list[DailyBlock]:
        """Blocks falling on any of the given dates."""
        return blocks_for_dates(self._blocks, dates)


class StatusConfig:
    """Loader for daily attendance statuses (daily-statuses.json)."""

    def __init__(self, path: Path | None = None):
        self.path = path
        self._statuses: list[DailyStatus] = []
        self.skipped: list[str] = []

        if path and path.exists():
            self._load(path)

    def _load(self, path: Path) -> None:
        for index, record in enumerate(read_records(path, key="statuses")):
            try:
                self._statuses.append(normalize_status_record(record, index=index, source=path.name))
            except InvalidRecordError as e:
                logger.warning(str(e))
                self.skipped.append(str(e))

        logger.info(f"Loaded {len(self._statuses)} daily statuses from {path}")

    @property
    def statuses(self) -> list[DailyStatus]:
        """All statuses, in file order."""
        return list(self._statuses)
