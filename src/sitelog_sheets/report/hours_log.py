"""Per-person hour rows appended to the shared "hours log" tab."""

from __future__ import annotations

import logging
from typing import Any

from sitelog_sheets.config import HOURS_LOG_SHEET
from sitelog_sheets.report.models import DailyReport
from sitelog_sheets.sheets import SheetsClient

logger = logging.getLogger(__name__)

HOURS_LOG_HEADERS = [
    "Date",
    "Employee #",
    "Full Name",
    "Project",
    "Position",
    "Regular Hours",
    "Overtime Hours",
    "Total Hours",
    "Report ID",
]


def build_hours_rows(report: DailyReport) -> list[list[Any]]:
    """One A:I row per person: date, employee #, name, project, position, hours, report id."""
    rows = []
    for person in report.personnel:
        regular = person.hours_worked or 0
        overtime = person.overtime_hours or 0
        rows.append(
            [
                report.report_date,
                person.employee_number,
                person.full_name,
                report.project_name,
                person.position,
                regular,
                overtime,
                regular + overtime,
                report.report_id,
            ]
        )
    return rows


class HoursLogWriter:
    """Appends report hours to a running log tab."""

    def __init__(self, client: SheetsClient, sheet_name: str = HOURS_LOG_SHEET) -> None:
        self.client = client
        self.sheet_name = sheet_name

    def append_report(self, spreadsheet_id: str, report: DailyReport) -> int:
        """Append the report's personnel hours.

        Returns:
            Number of rows appended (0 when the report has no personnel).
        """
        rows = build_hours_rows(report)
        if not rows:
            logger.info(f"No personnel in report {report.report_date}; nothing to log")
            return 0

        appended = self.client.append_rows(spreadsheet_id, f"{self.sheet_name}!A:I", rows)
        logger.info(f"Appended {appended} rows to '{self.sheet_name}'")
        return appended

    def read_rows(self, spreadsheet_id: str, rows: int = 10) -> list[list[Any]]:
        """Read the first ``rows`` rows of the log (A1:I<rows>), header included."""
        if rows < 1:
            raise ValueError(f"rows must be >= 1, got {rows}")
        return self.client.read_range(spreadsheet_id, f"{self.sheet_name}!A1:I{rows}")

    def read_header(self, spreadsheet_id: str) -> list[Any]:
        """Read the log's header row (A1:I1); empty if the tab has none."""
        values = self.read_rows(spreadsheet_id, rows=1)
        return values[0] if values else []
