"""Daily report layout and writing to Google Sheets.

Usage:
    from sitelog_sheets.report import DailyReport, ReportWriter

    report = DailyReport.from_dict(payload)
    writer = ReportWriter(sheets_client)
    result = writer.write_daily_report(spreadsheet_url, report)
"""

from __future__ import annotations

from sitelog_sheets.report.exceptions import (
    InvalidReportError,
    InvalidSpreadsheetUrlError,
    ReportWriteError,
    SheetResolutionError,
    SheetsReportError,
)
from sitelog_sheets.report.hours_log import HoursLogWriter
from sitelog_sheets.report.models import (
    ConstraintEntry,
    DailyReport,
    PersonnelEntry,
    SheetTarget,
    WorkLogEntry,
)
from sitelog_sheets.report.writer import (
    FormattingResult,
    ReportWriter,
    WriteResult,
    extract_spreadsheet_id,
)

__all__ = [
    "DailyReport",
    "PersonnelEntry",
    "WorkLogEntry",
    "ConstraintEntry",
    "SheetTarget",
    "ReportWriter",
    "WriteResult",
    "FormattingResult",
    "HoursLogWriter",
    "extract_spreadsheet_id",
    "SheetsReportError",
    "InvalidSpreadsheetUrlError",
    "InvalidReportError",
    "SheetResolutionError",
    "ReportWriteError",
]
