"""Tests for the sitelog-sheets CLI."""

import json
from unittest.mock import MagicMock, patch

from sitelog_sheets import cli
from sitelog_sheets.report import FormattingResult, SheetTarget, WriteResult

URL = "https://docs.google.com/spreadsheets/d/1Slqb1pbhnByUo_PCNPUZ8e3lMBG710fHJNVKWl7hOHQ/edit"


class TestCli:
    """Command dispatch."""

    def test_no_command_prints_help(self, capsys):
        """Should print help and exit 0."""
        assert cli.main([]) == 0
        assert "sitelog-sheets" in capsys.readouterr().out

    def test_status(self, capsys):
        """Should list the known secrets."""
        assert cli.main(["status"]) == 0
        out = capsys.readouterr().out
        assert "sitelogix/google-oauth" in out
        assert "sitelogix/google-sheets" in out

    def test_test_connection_success(self, capsys):
        """Should exit 0 when the spreadsheet is reachable."""
        with (
            patch.object(cli, "_build_client", return_value=MagicMock()),
            patch("sitelog_sheets.report.ReportWriter.test_connection", return_value=True),
        ):
            assert cli.main(["test-connection", URL]) == 0
        assert "Connected" in capsys.readouterr().out

    def test_test_connection_failure(self):
        """Should exit 1 when the connection test fails."""
        with (
            patch.object(cli, "_build_client", return_value=MagicMock()),
            patch("sitelog_sheets.report.ReportWriter.test_connection", return_value=False),
        ):
            assert cli.main(["test-connection", URL]) == 1

    def test_write_report(self, tmp_path, capsys):
        """Should load the JSON report and print the result."""
        path = tmp_path / "report.json"
        path.write_text(json.dumps(cli.SAMPLE_REPORT))
        result = WriteResult(
            target=SheetTarget("abc", "2025-11-17", 12),
            created=True,
            updated_cells=90,
            formatting=FormattingResult(applied=False, error="quota"),
        )

        with (
            patch.object(cli, "_build_client", return_value=MagicMock()),
            patch(
                "sitelog_sheets.report.ReportWriter.write_daily_report", return_value=result
            ) as write,
        ):
            assert cli.main(["write-report", str(path), URL, "--clear"]) == 0

        report = write.call_args.args[1]
        assert report.report_date == "2025-11-17"
        assert write.call_args.kwargs == {"clear_existing": True}
        out = capsys.readouterr().out
        assert "Created sheet '2025-11-17'" in out
        assert "skipped (quota)" in out

    def test_write_report_bad_file(self, tmp_path, capsys):
        """Should exit 1 for unreadable report files."""
        assert cli.main(["write-report", str(tmp_path / "missing.json"), URL]) == 1
        assert "Error" in capsys.readouterr().out

    def test_write_report_invalid_date(self, tmp_path):
        """Should exit 1 when the report date can't be a tab name."""
        path = tmp_path / "report.json"
        path.write_text(json.dumps({**cli.SAMPLE_REPORT, "reportDate": "11/17/2025"}))
        assert cli.main(["write-report", str(path), URL]) == 1

    def test_sample_report_alternate_person(self):
        """Should parse the sample's firstName/lastName/role/regularHours person."""
        from sitelog_sheets.report import DailyReport

        person = DailyReport.from_dict(cli.SAMPLE_REPORT).personnel[2]
        assert person.full_name == "Bob Johnson"
        assert person.position == "Electrician"
        assert person.hours_worked == 8
        assert person.employee_number == "1003"

    def test_hours_log_check_prints_rows(self, capsys):
        """Should print the first rows and flag an unexpected header."""
        writer = MagicMock()
        writer.read_rows.return_value = [["Date", "Name"], ["2025-11-17", "1001"]]

        with (
            patch.object(cli, "_build_client", return_value=MagicMock()),
            patch("sitelog_sheets.report.HoursLogWriter", return_value=writer),
        ):
            assert cli.main(["hours-log", "check", URL, "--rows", "5"]) == 0

        writer.read_rows.assert_called_once_with(
            "1Slqb1pbhnByUo_PCNPUZ8e3lMBG710fHJNVKWl7hOHQ", rows=5
        )
        out = capsys.readouterr().out
        assert "Row 2: ['2025-11-17', '1001']" in out
        assert "Expected header" in out

    def test_google_revoke(self, capsys):
        """Should revoke through GoogleOAuth and exit 0."""
        auth = MagicMock()
        auth.is_authorized.return_value = True

        with patch.object(cli, "_load_auth", return_value=auth):
            assert cli.main(["google", "revoke"]) == 0

        auth.revoke_token.assert_called_once_with()
        assert "Token revoked" in capsys.readouterr().out

    def test_google_revoke_without_token(self):
        """Should exit 1 when no refresh token is stored."""
        auth = MagicMock()
        auth.is_authorized.return_value = False

        with patch.object(cli, "_load_auth", return_value=auth):
            assert cli.main(["google", "revoke"]) == 1
        auth.revoke_token.assert_not_called()
