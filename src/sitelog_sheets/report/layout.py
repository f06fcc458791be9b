"""Cell layout of the daily report tab.

Row numbers are 1-based, as used in A1 range notation. Everything below the
column header row shifts with N, the number of personnel rows:

    rows 1-3      title block (A:H)
    row 7         personnel column headers (A:G)
    rows 8..7+N   personnel (A:G)
    rows 8+N, 9+N totals (A:M)
    row 12+N      TASKS / CONSTRAINTS BY LEVEL banner (A:I)
    row 14+N      task/constraint column headers (A:I)
    rows 15+N..   tasks paired with constraints by index (A:I)
"""

from __future__ import annotations

from typing import Any

from sitelog_sheets.config import DEFAULT_ORGANIZATION_NAME
from sitelog_sheets.report.models import DEFAULT_HEALTH_STATUS, DailyReport

TITLE_FIRST_ROW = 1
COLUMN_HEADER_ROW = 7
PERSONNEL_FIRST_ROW = 8

# Offsets from N (personnel count)
TOTALS_OFFSET = 8
SECTION_BANNER_OFFSET = 12
TASK_HEADER_OFFSET = 14
TASK_FIRST_OFFSET = 15

PERSONNEL_HEADERS = ["Full Name", "Go By", "Position", "Team #", "Limitations", "Hours", "O/T"]
TASK_WIDTH = 9  # columns A..I


def column_letter(index: int) -> str:
    """Convert a 1-based column index to its letter ("A", ..., "Z", "AA", ...)."""
    if index < 1:
        raise ValueError(f"Column index must be >= 1, got {index}")
    letters = ""
    while index:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def a1_range(sheet_name: str, first_row: int, last_row: int, first_col: int, last_col: int) -> str:
    """Build "<tab>!<col><row>:<col><row>" for 1-based rows and columns."""
    return (
        f"{sheet_name}!{column_letter(first_col)}{first_row}"
        f":{column_letter(last_col)}{last_row}"
    )


def title_rows(report: DailyReport, organization_name: str) -> list[list[Any]]:
    return [
        ["", "", "", organization_name, "", "", "", f"Date:{report.report_date}"],
        ["", "", "", "", "", "", "", ""],
        ["", "", "", report.project_name or "", "", "", "", ""],
    ]


def personnel_rows(report: DailyReport) -> list[list[Any]]:
    return [
        [
            p.full_name or "",
            p.go_by_name or "",
            p.position or "",
            p.team_assignment or "",
            p.health_status or DEFAULT_HEALTH_STATUS,
            p.hours_worked or 0,
            p.overtime_hours or 0,
        ]
        for p in report.personnel
    ]


def totals_rows(report: DailyReport) -> list[list[Any]]:
    return [
        ["Total pax:", report.total_headcount, "", "", "", "", "", "", "", "", "", "Regular", "Overtime"],
        [
            "", "", "", "", "", "", "", "", "", "",
            "Total Hours:", report.total_regular_hours, report.total_overtime_hours,
        ],
    ]


def task_rows(report: DailyReport) -> list[list[Any]]:
    """Pair work logs and constraints by position.

    The table is as long as the longer list; the shorter side is left blank.
    """
    rows = []
    for i in range(report.task_row_count):
        work_log = report.work_logs[i] if i < len(report.work_logs) else None
        constraint = report.constraints[i] if i < len(report.constraints) else None
        rows.append(
            [
                (work_log.team_id if work_log else None) or "",
                "",
                (work_log.task_description if work_log else None) or "",
                "",
                "",
                "",
                "",
                (constraint.level if constraint else None) or "",
                (constraint.description if constraint else None) or "",
            ]
        )
    return rows


def build_value_ranges(
    sheet_name: str,
    report: DailyReport,
    organization_name: str = DEFAULT_ORGANIZATION_NAME,
) -> list[dict[str, Any]]:
    """Compute every range written for one report.

    Args:
        sheet_name: Destination tab title.
        report: The daily report.
        organization_name: Text for the title block.

    Returns:
        ``[{"range": ..., "values": ...}]`` ready for a values batchUpdate.
        Blocks with no rows (no personnel, no tasks or constraints) are left out.
    """
    n = len(report.personnel)
    people = personnel_rows(report)
    tasks = task_rows(report)

    data = [
        {
            "range": a1_range(sheet_name, TITLE_FIRST_ROW, TITLE_FIRST_ROW + 2, 1, 8),
            "values": title_rows(report, organization_name),
        },
        {
            "range": a1_range(sheet_name, COLUMN_HEADER_ROW, COLUMN_HEADER_ROW, 1, 7),
            "values": [list(PERSONNEL_HEADERS)],
        },
    ]

    if people:
        data.append(
            {
                "range": a1_range(sheet_name, PERSONNEL_FIRST_ROW, PERSONNEL_FIRST_ROW + n - 1, 1, 7),
                "values": people,
            }
        )

    data.extend(
        [
            {
                "range": a1_range(sheet_name, TOTALS_OFFSET + n, TOTALS_OFFSET + n + 1, 1, 13),
                "values": totals_rows(report),
            },
            {
                "range": a1_range(
                    sheet_name, SECTION_BANNER_OFFSET + n, SECTION_BANNER_OFFSET + n, 1, TASK_WIDTH
                ),
                "values": [["", "", "", "", "TASKS", "", "", "", "CONSTRAINTS BY LEVEL"]],
            },
            {
                "range": a1_range(
                    sheet_name, TASK_HEADER_OFFSET + n, TASK_HEADER_OFFSET + n, 1, TASK_WIDTH
                ),
                "values": [["Team", "", "Task:", "", "", "", "", "Level", "Constraint"]],
            },
        ]
    )

    if tasks:
        data.append(
            {
                "range": a1_range(
                    sheet_name,
                    TASK_FIRST_OFFSET + n,
                    TASK_HEADER_OFFSET + n + len(tasks),
                    1,
                    TASK_WIDTH,
                ),
                "values": tasks,
            }
        )

    return data
