"""Daily report writer exceptions."""


class SheetsReportError(Exception):
    """Base exception for report-to-spreadsheet errors."""

    pass


class InvalidSpreadsheetUrlError(SheetsReportError):
    """Raised when a spreadsheet URL or identifier cannot be parsed."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid Google Sheets URL: {value!r}")


class InvalidReportError(SheetsReportError):
    """Raised when report data cannot be laid out in a sheet."""

    pass


class SheetResolutionError(SheetsReportError):
    """Raised when the target tab can't be looked up or created."""

    def __init__(self, spreadsheet_id: str, sheet_name: str, reason: str):
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name
        super().__init__(f"Could not resolve sheet '{sheet_name}' in {spreadsheet_id}: {reason}")


class ReportWriteError(SheetsReportError):
    """Raised when the batched value write fails.

    The target tab may already exist at this point; re-running the write is
    safe since the same ranges are overwritten.
    """

    def __init__(self, spreadsheet_id: str, sheet_name: str, reason: str):
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name
        super().__init__(f"Failed to write report to '{sheet_name}' in {spreadsheet_id}: {reason}")
