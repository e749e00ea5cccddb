"""Unified data source loader."""

from pathlib import Path

from ..constants import (
    BLOCKS_CSV,
    BLOCKS_JSON,
    DEFAULT_DATA_DIR,
    SLOTS_JSON,
    STATUSES_JSON,
    STUDENTS_CSV,
    STUDENTS_JSON,
)
from ..exceptions import SourceNotFoundError
from .blocks import BlockConfig, StatusConfig
from .roster import RosterConfig
from .slots import SlotConfig


class DataLoader:
    """Unified loader for roster, slot, block and status files."""

    def __init__(
        self,
        data_dir: Path | None = None,
        students_path: Path | None = None,
        slots_path: Path | None = None,
        blocks_path: Path | None = None,
        statuses_path: Path | None = None,
    ):
        """
        Initialize data loader.

        Args:
            data_dir: Directory containing the data files.
                      Expected files:
                      - students.json or students.csv
                      - slots.json
                      - blocks.json or blocks.csv (optional)
                      - daily-statuses.json (optional)
            students_path: Overrides the roster file from data_dir.
            slots_path: Overrides the slots file from data_dir.
            blocks_path: Overrides the blocks file from data_dir.
            statuses_path: Overrides the statuses file from data_dir.
        """
        if data_dir is None:
            data_dir = Path(DEFAULT_DATA_DIR)

        self.data_dir = Path(data_dir)

        self.roster = RosterConfig(students_path or self._get_path(STUDENTS_JSON, STUDENTS_CSV))
        self.slots = SlotConfig(slots_path or self._get_path(SLOTS_JSON))
        self.blocks = BlockConfig(blocks_path or self._get_path(BLOCKS_JSON, BLOCKS_CSV))
        self.statuses = StatusConfig(statuses_path or self._get_path(STATUSES_JSON))

    def _get_path(self, *filenames: str) -> Path | None:
        """Get path to the first existing file among the candidates."""
        for filename in filenames:
            path = self.data_dir / filename
            if path.exists():
                return path
        return None

    def require_core_sources(self) -> None:
        """Make sure the roster and slot files were found.

        Raises:
            SourceNotFoundError: If either source is missing
        """
        if self.roster.path is None or not self.roster.path.exists():
            raise SourceNotFoundError(
                "student roster",
                [str(self.data_dir / STUDENTS_JSON), str(self.data_dir / STUDENTS_CSV)],
            )
        if self.slots.path is None or not self.slots.path.exists():
            raise SourceNotFoundError("slots", [str(self.data_dir / SLOTS_JSON)])

    @property
    def problems(self) -> list[str]:
        """Records skipped while loading, across all sources."""
        return [
            *self.roster.skipped,
            *self.slots.skipped,
            *self.blocks.skipped,
            *self.statuses.skipped,
        ]
