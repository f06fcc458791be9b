"""Write a daily report into a dated tab of a Google Spreadsheet.

A write runs three sequential steps against the same spreadsheet:

1. resolve: find the tab titled with the report date, or create it
2. write: put every block of the layout in one values batchUpdate
3. format: style the title/header rows (best effort, never fails the write)

Tab creation is check-then-act. Two writers racing on the same report date
can create duplicate tabs; callers must serialize writes per date.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from sitelog_sheets.config import DEFAULT_ORGANIZATION_NAME
from sitelog_sheets.google.exceptions import GoogleAuthError
from sitelog_sheets.report.exceptions import (
    InvalidSpreadsheetUrlError,
    ReportWriteError,
    SheetResolutionError,
)
from sitelog_sheets.report.formatting import build_format_requests
from sitelog_sheets.report.layout import build_value_ranges
from sitelog_sheets.report.models import DailyReport, SheetTarget
from sitelog_sheets.sheets import SheetsClient

logger = logging.getLogger(__name__)

_URL_ID_PATTERN = re.compile(r"/spreadsheets/d/([a-zA-Z0-9_-]+)")
_BARE_ID_PATTERN = re.compile(r"[a-zA-Z0-9_-]{20,}")


def extract_spreadsheet_id(value: str) -> str:
    """Get the spreadsheet id from a Sheets URL or a bare id.

    Args:
        value: e.g. "https://docs.google.com/spreadsheets/d/<id>/edit#gid=0".

    Returns:
        The spreadsheet id.

    Raises:
        InvalidSpreadsheetUrlError: If no id can be found.
    """
    value = (value or "").strip()
    match = _URL_ID_PATTERN.search(value)
    if match:
        return match.group(1)
    if _BARE_ID_PATTERN.fullmatch(value):
        return value
    raise InvalidSpreadsheetUrlError(value)


@dataclass(frozen=True)
class FormattingResult:
    """Outcome of the formatting step; failures are reported, not raised."""

    applied: bool
    error: str | None = None


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a full report write."""

    target: SheetTarget
    created: bool
    updated_cells: int
    formatting: FormattingResult


class ReportWriter:
    """Writes daily reports through a caller-owned SheetsClient.

    Usage:
        writer = ReportWriter(SheetsClient(auth))
        result = writer.write_daily_report(spreadsheet_url, report)
        print(result.target.sheet_name, result.formatting.applied)
    """

    def __init__(
        self,
        client: SheetsClient,
        organization_name: str = DEFAULT_ORGANIZATION_NAME,
        value_input_option: str = "RAW",
    ) -> None:
        self.client = client
        self.organization_name = organization_name
        self.value_input_option = value_input_option

    # =========================================================================
    # Sheet resolution
    # =========================================================================

    def _resolve(self, spreadsheet_id: str, sheet_name: str) -> tuple[int, bool]:
        try:
            spreadsheet = self.client.get_spreadsheet(spreadsheet_id)
            existing = spreadsheet.find_sheet(sheet_name)
            if existing is not None:
                logger.info(f"Using existing sheet '{sheet_name}' (id {existing.id})")
                return existing.id, False

            sheet = self.client.add_sheet(spreadsheet_id, sheet_name)
            return sheet.id, True
        except GoogleAuthError:
            raise
        except Exception as e:
            logger.error(f"Error resolving sheet '{sheet_name}': {e}")
            raise SheetResolutionError(spreadsheet_id, sheet_name, str(e)) from e

    def resolve_sheet(self, spreadsheet_id: str, sheet_name: str) -> int:
        """Return the id of the tab titled ``sheet_name``, creating it if missing.

        Titles are matched exactly (case-sensitive). Metadata is fetched fresh
        on every call.

        Raises:
            SheetResolutionError: If the lookup or creation call fails.
        """
        sheet_id, _ = self._resolve(spreadsheet_id, sheet_name)
        return sheet_id

    # =========================================================================
    # Values
    # =========================================================================

    def write_report(self, spreadsheet_id: str, sheet_name: str, report: DailyReport) -> int:
        """Write all report blocks to an existing tab in one batched call.

        Returns:
            Number of cells updated.

        Raises:
            ReportWriteError: If the batched write fails. Nothing is retried.
        """
        data = build_value_ranges(sheet_name, report, self.organization_name)
        try:
            return self.client.batch_write_values(
                spreadsheet_id, data, value_input_option=self.value_input_option
            )
        except GoogleAuthError:
            raise
        except Exception as e:
            logger.error(f"Error writing report to '{sheet_name}': {e}")
            raise ReportWriteError(spreadsheet_id, sheet_name, str(e)) from e

    # =========================================================================
    # Formatting
    # =========================================================================

    def apply_formatting(
        self, spreadsheet_id: str, sheet_id: int, sheet_name: str
    ) -> FormattingResult:
        """Apply the report template formatting.

        Formatting is decorative: errors are logged and returned in the result.
        """
        try:
            self.client.batch_update(spreadsheet_id, build_format_requests(sheet_id))
        except Exception as e:
            logger.warning(f"Formatting of sheet '{sheet_name}' skipped: {e}")
            return FormattingResult(applied=False, error=str(e))
        return FormattingResult(applied=True)

    # =========================================================================
    # Workflows
    # =========================================================================

    def write_daily_report(
        self,
        spreadsheet_url: str,
        report: DailyReport,
        clear_existing: bool = False,
    ) -> WriteResult:
        """Resolve the report's tab, write its values and format it.

        Args:
            spreadsheet_url: Sheets URL (or bare id) of the target spreadsheet.
            report: The daily report; ``report.report_date`` names the tab.
            clear_existing: Clear values of a pre-existing tab before writing,
                so rows left by a longer earlier report don't linger.

        Raises:
            InvalidSpreadsheetUrlError: Before any network call.
            SheetResolutionError: If the tab can't be found or created.
            ReportWriteError: If the values can't be written (tab may exist).
        """
        spreadsheet_id = extract_spreadsheet_id(spreadsheet_url)
        sheet_name = report.report_date

        sheet_id, created = self._resolve(spreadsheet_id, sheet_name)

        if clear_existing and not created:
            try:
                self.client.clear_range(spreadsheet_id, sheet_name)
            except GoogleAuthError:
                raise
            except Exception as e:
                raise ReportWriteError(spreadsheet_id, sheet_name, f"clear failed: {e}") from e

        updated_cells = self.write_report(spreadsheet_id, sheet_name, report)
        formatting = self.apply_formatting(spreadsheet_id, sheet_id, sheet_name)

        logger.info(f"Report written to Google Sheets: {sheet_name}")
        return WriteResult(
            target=SheetTarget(spreadsheet_id, sheet_name, sheet_id),
            created=created,
            updated_cells=updated_cells,
            formatting=formatting,
        )

    def test_connection(self, spreadsheet_url: str) -> bool:
        """Check that the spreadsheet is reachable with the current credentials.

        Read-only; returns False (after logging) on any failure.
        """
        try:
            spreadsheet_id = extract_spreadsheet_id(spreadsheet_url)
            spreadsheet = self.client.get_spreadsheet(spreadsheet_id)
        except Exception as e:
            logger.error(f"Connection test failed: {e}")
            return False

        logger.info(f"Successfully connected to: {spreadsheet.title}")
        return True
