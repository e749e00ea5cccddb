"""Export functionality for fill-in recommendation reports."""

import csv
import json
from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd

from .exceptions import UnsupportedFormatError
from .models import FillInReport
from .utils import group_size_text

RECOMMENDATION_COLUMNS = [
    "schedule_id",
    "slot_date",
    "day_of_week",
    "start_time",
    "coach_id",
    "coach_name",
    "effective_capacity",
    "needed_count",
    "rank",
    "student_id",
    "name",
    "lessons_owed",
    "group_size",
    "sub_group",
]


def recommendation_rows(report: FillInReport) -> list[dict]:
    """Flatten a report into one row per recommended student.

    Slots without any recommendation still get one row with empty student
    columns, so every processed slot is visible.
    """
    rows = []
    for result in report.results:
        slot = result.slot
        base = {
            "schedule_id": slot.schedule_id,
            "slot_date": slot.slot_date,
            "day_of_week": slot.day_of_week,
            "start_time": slot.start_time,
            "coach_id": slot.coach_id,
            "coach_name": slot.coach_name,
            "effective_capacity": result.effective_capacity,
            "needed_count": result.needed_count,
        }
        if not result.recommended_group:
            rows.append({**base, "rank": None, "student_id": None, "name": None,
                         "lessons_owed": None, "group_size": None, "sub_group": None})
            continue
        for rank, member in enumerate(result.recommended_group, start=1):
            rows.append(
                {
                    **base,
                    "rank": rank,
                    "student_id": member.student_id,
                    "name": member.name,
                    "lessons_owed": member.lessons_owed,
                    "group_size": group_size_text(member.group_of),
                    "sub_group": member.sub_group,
                }
            )
    return rows


class BaseExporter(ABC):
    """Base class for exporters."""

    @abstractmethod
    def export(self, report: FillInReport, output_path: str | Path) -> None:
        """Export a report to file.

        Args:
            report: FillInReport to export
            output_path: Path to output file
        """
        pass


class JSONExporter(BaseExporter):
    """Export to JSON format."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self, report: FillInReport, output_path: str | Path) -> None:
        """Export report to a JSON file."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                report.to_dict(),
                f,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
            )


class CSVExporter(BaseExporter):
    """Export to CSV format (one row per recommended student)."""

    def export(self, report: FillInReport, output_path: str | Path) -> None:
        """Export report to a CSV file."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=RECOMMENDATION_COLUMNS)
            writer.writeheader()
            writer.writerows(recommendation_rows(report))


class ExcelExporter(BaseExporter):
    """Export to Excel format (Recommendations and Summary sheets)."""

    def export(self, report: FillInReport, output_path: str | Path) -> None:
        """Export report to an Excel workbook."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            self._export_recommendations_sheet(report, writer)
            self._export_summary_sheet(report, writer)

    def _export_recommendations_sheet(self, report: FillInReport, writer: pd.ExcelWriter) -> None:
        df = pd.DataFrame(recommendation_rows(report), columns=RECOMMENDATION_COLUMNS)
        df.to_excel(writer, sheet_name="Recommendations", index=False)

    def _export_summary_sheet(self, report: FillInReport, writer: pd.ExcelWriter) -> None:
        rows = [{"metric": "generation_date", "value": report.generation_date}]
        rows.extend(
            {"metric": metric, "value": value}
            for metric, value in report.statistics.to_dict().items()
        )
        pd.DataFrame(rows).to_excel(writer, sheet_name="Summary", index=False)


EXPORTERS: dict[str, type[BaseExporter]] = {
    "json": JSONExporter,
    "csv": CSVExporter,
    "excel": ExcelExporter,
}


def get_exporter(format_name: str) -> BaseExporter:
    """Get exporter instance by format name.

    Args:
        format_name: "json", "csv", or "excel"

    Returns:
        Exporter instance

    Raises:
        UnsupportedFormatError: If the format is unknown
    """
    exporter_class = EXPORTERS.get(format_name.lower())
    if exporter_class is None:
        raise UnsupportedFormatError(format_name, list(EXPORTERS))
    return exporter_class()
