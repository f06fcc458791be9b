"""Tests for the hours log writer."""

from unittest.mock import MagicMock

import pytest

from sitelog_sheets.report import DailyReport, HoursLogWriter, PersonnelEntry
from sitelog_sheets.report.hours_log import build_hours_rows
from sitelog_sheets.sheets import SheetsClient


def make_report(personnel):
    return DailyReport(
        report_date="2025-11-17",
        project_name="Test Construction Site",
        report_id="test_rpt_20251117",
        personnel=personnel,
    )


class TestBuildHoursRows:
    """Row construction."""

    def test_row_columns(self):
        """Should emit date, employee #, name, project, position, hours, total, report id."""
        report = make_report(
            [
                PersonnelEntry(
                    "John Smith",
                    position="Foreman",
                    hours_worked=8,
                    overtime_hours=2,
                    employee_number="1001",
                )
            ]
        )
        assert build_hours_rows(report) == [
            [
                "2025-11-17",
                "1001",
                "John Smith",
                "Test Construction Site",
                "Foreman",
                8,
                2,
                10,
                "test_rpt_20251117",
            ]
        ]

    def test_missing_hours_count_as_zero(self):
        """Should treat missing hours as 0."""
        report = make_report([PersonnelEntry("Jane Doe", hours_worked=None, overtime_hours=None)])
        assert build_hours_rows(report)[0][5:8] == [0, 0, 0]

    def test_alternate_personnel_shape_row(self):
        """Should log a firstName/lastName/role/regularHours person like any other."""
        person = PersonnelEntry.from_dict(
            {
                "employeeId": "1003",
                "firstName": "Bob",
                "lastName": "Johnson",
                "role": "Electrician",
                "regularHours": 8,
                "overtimeHours": 4,
            }
        )
        assert build_hours_rows(make_report([person])) == [
            [
                "2025-11-17",
                "1003",
                "Bob Johnson",
                "Test Construction Site",
                "Electrician",
                8,
                4,
                12,
                "test_rpt_20251117",
            ]
        ]


class TestHoursLogWriter:
    """Appending to the log tab."""

    def test_append(self):
        """Should append every row to <tab>!A:I."""
        client = MagicMock(spec=SheetsClient)
        client.append_rows.return_value = 2
        report = make_report([PersonnelEntry("A"), PersonnelEntry("B")])

        assert HoursLogWriter(client).append_report("sheet-123", report) == 2
        spreadsheet_id, range_notation, rows = client.append_rows.call_args.args
        assert range_notation == "hours log!A:I"
        assert len(rows) == 2

    def test_empty_report_skips_call(self):
        """Should not call the API without personnel."""
        client = MagicMock(spec=SheetsClient)
        assert HoursLogWriter(client).append_report("sheet-123", make_report([])) == 0
        client.append_rows.assert_not_called()

    def test_read_header(self):
        """Should return the first row of A1:I1."""
        client = MagicMock(spec=SheetsClient)
        client.read_range.return_value = [["Date", "Employee #"]]

        assert HoursLogWriter(client, sheet_name="Log").read_header("sheet-123") == [
            "Date",
            "Employee #",
        ]
        client.read_range.assert_called_once_with("sheet-123", "Log!A1:I1")

    def test_read_header_empty(self):
        """Should return [] for an empty tab."""
        client = MagicMock(spec=SheetsClient)
        client.read_range.return_value = []
        assert HoursLogWriter(client).read_header("sheet-123") == []

    def test_read_rows_defaults_to_ten(self):
        """Should read A1:I10 so logged rows show up under the header."""
        client = MagicMock(spec=SheetsClient)
        client.read_range.return_value = [["Date"], ["2025-11-17", "1001"]]

        assert HoursLogWriter(client, sheet_name="hours log").read_rows("sheet-123") == [
            ["Date"],
            ["2025-11-17", "1001"],
        ]
        client.read_range.assert_called_once_with("sheet-123", "hours log!A1:I10")

    def test_read_rows_custom_count(self):
        """Should honor the rows argument."""
        client = MagicMock(spec=SheetsClient)
        client.read_range.return_value = []
        HoursLogWriter(client, sheet_name="Log").read_rows("sheet-123", rows=25)
        client.read_range.assert_called_once_with("sheet-123", "Log!A1:I25")

    def test_read_rows_rejects_zero(self):
        """Should reject a non-positive row count."""
        with pytest.raises(ValueError):
            HoursLogWriter(MagicMock(spec=SheetsClient)).read_rows("sheet-123", rows=0)
