"""Tests for the daily report cell layout."""

import pytest

from sitelog_sheets.report import (
    ConstraintEntry,
    DailyReport,
    PersonnelEntry,
    WorkLogEntry,
)
from sitelog_sheets.report.layout import (
    PERSONNEL_HEADERS,
    a1_range,
    build_value_ranges,
    column_letter,
    task_rows,
)


def make_report(n_personnel=0, n_work_logs=0, n_constraints=0, **kwargs):
    personnel = [
        PersonnelEntry(
            full_name=f"Worker {i}",
            go_by_name=f"W{i}",
            position="Laborer",
            team_assignment="T1",
            hours_worked=8,
        )
        for i in range(n_personnel)
    ]
    work_logs = [WorkLogEntry(f"T{i}", f"Task {i}") for i in range(n_work_logs)]
    constraints = [ConstraintEntry("High", f"Constraint {i}") for i in range(n_constraints)]
    return DailyReport(
        report_date=kwargs.pop("report_date", "2024-01-15"),
        project_name=kwargs.pop("project_name", "Riverside Tower"),
        total_headcount=kwargs.pop("total_headcount", n_personnel),
        total_regular_hours=kwargs.pop("total_regular_hours", 8.0 * n_personnel),
        total_overtime_hours=kwargs.pop("total_overtime_hours", 0),
        personnel=personnel,
        work_logs=work_logs,
        constraints=constraints,
        **kwargs,
    )


def ranges_by_start(data):
    """Map the first cell (e.g. "A8") of each range to its entry."""
    return {entry["range"].split("!")[1].split(":")[0]: entry for entry in data}


class TestColumnLetters:
    """A1 column and range helpers."""

    @pytest.mark.parametrize(
        "index,letter",
        [(1, "A"), (7, "G"), (13, "M"), (26, "Z"), (27, "AA"), (52, "AZ"), (53, "BA")],
    )
    def test_column_letter(self, index, letter):
        """Should convert 1-based indices to letters."""
        assert column_letter(index) == letter

    def test_column_letter_rejects_zero(self):
        """Should reject non-positive indices."""
        with pytest.raises(ValueError):
            column_letter(0)

    def test_a1_range(self):
        """Should format tab!start:end."""
        assert a1_range("2024-01-15", 8, 12, 1, 7) == "2024-01-15!A8:G12"


class TestFixedBlocks:
    """Blocks that never move."""

    def test_title_block(self):
        """Should place organization, date label and project in A1:H3."""
        data = build_value_ranges("2024-01-15", make_report())
        title = data[0]
        assert title["range"] == "2024-01-15!A1:H3"
        assert title["values"][0][3] == "Parkway Construction Services"
        assert title["values"][0][7] == "Date:2024-01-15"
        assert title["values"][1] == [""] * 8
        assert title["values"][2][3] == "Riverside Tower"

    def test_custom_organization(self):
        """Should use the given organization name."""
        data = build_value_ranges("2024-01-15", make_report(), organization_name="Acme Builders")
        assert data[0]["values"][0][3] == "Acme Builders"

    def test_column_headers(self):
        """Should write the seven personnel headers on row 7."""
        data = build_value_ranges("2024-01-15", make_report())
        assert data[1] == {"range": "2024-01-15!A7:G7", "values": [PERSONNEL_HEADERS]}
        assert PERSONNEL_HEADERS == [
            "Full Name", "Go By", "Position", "Team #", "Limitations", "Hours", "O/T",
        ]


class TestPersonnelOffsets:
    """Everything below row 7 shifts with the personnel count."""

    @pytest.mark.parametrize("n", [0, 1, 5])
    def test_totals_follow_personnel(self, n):
        """Should put personnel at 8..7+N and totals at 8+N."""
        ranges = ranges_by_start(build_value_ranges("2024-01-15", make_report(n_personnel=n)))

        if n:
            assert ranges["A8"]["range"] == f"2024-01-15!A8:G{7 + n}"
            assert len(ranges["A8"]["values"]) == n
        assert ranges[f"A{8 + n}"]["range"] == f"2024-01-15!A{8 + n}:M{9 + n}"
        assert ranges[f"A{12 + n}"]["values"][0][4] == "TASKS"
        assert ranges[f"A{14 + n}"]["values"][0][0] == "Team"

    def test_no_personnel_block_when_empty(self):
        """Should not emit an inverted A8:G7 range."""
        data = build_value_ranges("2024-01-15", make_report(n_personnel=0))
        assert all(not entry["range"].endswith("A8:G7") for entry in data)
        assert ranges_by_start(data)["A8"]["values"][0][0] == "Total pax:"

    def test_personnel_rows_in_input_order(self):
        """Should keep input order and column mapping."""
        data = build_value_ranges("2024-01-15", make_report(n_personnel=3))
        rows = ranges_by_start(data)["A8"]["values"]
        assert [row[0] for row in rows] == ["Worker 0", "Worker 1", "Worker 2"]
        assert rows[0] == ["Worker 0", "W0", "Laborer", "T1", "Healthy", 8, 0]

    def test_personnel_defaults(self):
        """Should default health status to Healthy and hours to 0."""
        report = DailyReport(
            report_date="2024-01-15",
            project_name="P",
            personnel=[
                PersonnelEntry(
                    full_name="Ana Ruiz",
                    go_by_name="Ana",
                    position="Operator",
                    team_assignment="T3",
                    health_status="",
                    hours_worked=None,
                    overtime_hours=None,
                )
            ],
        )
        row = ranges_by_start(build_value_ranges("2024-01-15", report))["A8"]["values"][0]
        assert row[4:] == ["Healthy", 0, 0]

    def test_personnel_none_text_fields_become_blank(self):
        """Should write "" for missing name, go-by, position and team."""
        report = DailyReport(
            report_date="2024-01-15",
            project_name=None,
            personnel=[
                PersonnelEntry(
                    full_name=None, go_by_name=None, position=None, team_assignment=None
                )
            ],
        )
        ranges = ranges_by_start(build_value_ranges("2024-01-15", report))
        assert ranges["A8"]["values"][0] == ["", "", "", "", "Healthy", 0, 0]
        assert ranges["A1"]["values"][2][3] == ""

    def test_totals_content(self):
        """Should write caller totals under labeled sub-columns."""
        report = make_report(
            n_personnel=2, total_headcount=14, total_regular_hours=100.5, total_overtime_hours=12
        )
        totals = ranges_by_start(build_value_ranges("2024-01-15", report))["A10"]["values"]
        assert totals[0][:2] == ["Total pax:", 14]
        assert totals[0][11:] == ["Regular", "Overtime"]
        assert totals[1][10:] == ["Total Hours:", 100.5, 12]
        assert len(totals[0]) == len(totals[1]) == 13


class TestTasksAndConstraints:
    """Work logs and constraints share one table, paired by index."""

    @pytest.mark.parametrize("w,m", [(3, 1), (1, 3), (2, 2), (0, 2), (2, 0)])
    def test_row_count_is_max(self, w, m):
        """Should produce max(W, M) rows with blanks past each list's end."""
        rows = task_rows(make_report(n_work_logs=w, n_constraints=m))
        assert len(rows) == max(w, m)
        for i, row in enumerate(rows):
            assert len(row) == 9
            if i >= w:
                assert row[0] == "" and row[2] == ""
            else:
                assert row[0] == f"T{i}" and row[2] == f"Task {i}"
            if i >= m:
                assert row[7] == "" and row[8] == ""
            else:
                assert row[7] == "High" and row[8] == f"Constraint {i}"

    def test_table_range(self):
        """Should start at 15+N and end at 14+N+M."""
        report = make_report(n_personnel=2, n_work_logs=3, n_constraints=1)
        ranges = ranges_by_start(build_value_ranges("2024-01-15", report))
        assert ranges["A17"]["range"] == "2024-01-15!A17:I19"
        assert len(ranges["A17"]["values"]) == 3

    def test_no_table_when_both_empty(self):
        """Should omit the data range when there are no tasks or constraints."""
        data = build_value_ranges("2024-01-15", make_report(n_personnel=1))
        assert "A16" not in ranges_by_start(data)
        assert len(data) == 6

    def test_none_text_fields_become_blank(self):
        """Should write "" for missing team, task, level and description."""
        report = DailyReport(
            report_date="2024-01-15",
            project_name="P",
            work_logs=[WorkLogEntry(None, None)],
            constraints=[ConstraintEntry(None, None)],
        )
        assert task_rows(report) == [["", "", "", "", "", "", "", "", ""]]
