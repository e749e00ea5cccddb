"""Student roster loader."""

import logging
from pathlib import Path

from ..exceptions import InvalidRecordError
from ..models import Student
from ..normalization import normalize_student_record
from .records import read_records

logger = logging.getLogger(__name__)


class RosterConfig:
    """Loader for the student roster (students.json or students.csv)."""

    def __init__(self, path: Path | None = None):
        self.path = path
        self._students: list[Student] = []
        self.skipped: list[str] = []

        if path and path.exists():
            self._load(path)

    def _load(self, path: Path) -> None:
        """Load and normalise student records, skipping malformed ones."""
        seen: set = set()
        for index, record in enumerate(read_records(path, key="students")):
            try:
                student = normalize_student_record(record, index=index, source=path.name)
            except InvalidRecordError as e:
                logger.warning(str(e))
                self.skipped.append(str(e))
                continue
            if student.id in seen:
                message = f"Duplicate student id {student.id} in {path.name}, keeping the first"
                logger.warning(message)
                self.skipped.append(message)
                continue
            seen.add(student.id)
            self._students.append(student)

        logger.info(f"Loaded {len(self._students)} students from {path}")

    @property
    def students(self) -> list[Student]:
        """All students, in file order."""
        return list(self._students)

    def get(self, student_id) -> Student | None:
        """Find a student by id."""
        for student in self._students:
            if student.id == student_id:
                return student
        return None

    def without_availability(self) -> list[Student]:
        """Students that can never be offered because they have no availability."""
        return [s for s in self._students if not s.availability_string]
