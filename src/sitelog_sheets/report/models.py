"""Daily report value objects consumed by the sheet writer."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from sitelog_sheets.report.exceptions import InvalidReportError

# Characters Google Sheets rejects in tab titles
_ILLEGAL_SHEET_CHARS = re.compile(r"[\[\]*?/\\:]")
MAX_SHEET_NAME_LENGTH = 100

DEFAULT_HEALTH_STATUS = "Healthy"


def _pick(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """First non-None value among camelCase/snake_case spellings."""
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return default


def validate_sheet_name(name: str) -> str:
    """Check that a string can be used as a sheet (tab) title.

    Raises:
        InvalidReportError: If the name is empty, too long or has illegal characters.
    """
    if not name or not name.strip():
        raise InvalidReportError("Report date (sheet name) must not be empty")
    if len(name) > MAX_SHEET_NAME_LENGTH:
        raise InvalidReportError(
            f"Sheet name exceeds {MAX_SHEET_NAME_LENGTH} characters: {name[:20]}..."
        )
    if _ILLEGAL_SHEET_CHARS.search(name):
        raise InvalidReportError(f"Sheet name contains an illegal character: {name!r}")
    return name


@dataclass(frozen=True)
class PersonnelEntry:
    """One person on the daily roster."""

    full_name: str
    go_by_name: str = ""
    position: str = ""
    team_assignment: str = ""
    health_status: str = DEFAULT_HEALTH_STATUS
    hours_worked: float = 0
    overtime_hours: float = 0
    employee_number: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PersonnelEntry:
        full_name = _pick(data, "fullName", "full_name")
        if not full_name:
            first = _pick(data, "firstName", "first_name", default="")
            last = _pick(data, "lastName", "last_name", default="")
            full_name = f"{first} {last}".strip()

        return cls(
            full_name=full_name,
            go_by_name=_pick(data, "goByName", "go_by_name", default=""),
            position=_pick(data, "position") or _pick(data, "role", default=""),
            team_assignment=_pick(data, "teamAssignment", "team_assignment", default=""),
            health_status=_pick(data, "healthStatus", "health_status") or DEFAULT_HEALTH_STATUS,
            hours_worked=_pick(data, "hoursWorked", "hours_worked")
            or _pick(data, "regularHours", "regular_hours")
            or 0,
            overtime_hours=_pick(data, "overtimeHours", "overtime_hours") or 0,
            employee_number=str(
                _pick(data, "employeeNumber", "employee_number", "employeeId", default="")
            ),
        )


@dataclass(frozen=True)
class WorkLogEntry:
    """A task performed by a team."""

    team_id: str
    task_description: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WorkLogEntry:
        return cls(
            team_id=_pick(data, "teamId", "team_id", default=""),
            task_description=_pick(data, "taskDescription", "task_description", default=""),
        )


@dataclass(frozen=True)
class ConstraintEntry:
    """A site constraint with its severity level."""

    level: str
    description: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConstraintEntry:
        return cls(
            level=_pick(data, "level", default=""),
            description=_pick(data, "description", default=""),
        )


@dataclass(frozen=True)
class DailyReport:
    """A fully assembled daily report.

    ``report_date`` doubles as the destination tab name. Totals are taken as
    given; they are never recomputed from ``personnel``.
    """

    report_date: str
    project_name: str
    total_headcount: int = 0
    total_regular_hours: float = 0
    total_overtime_hours: float = 0
    personnel: tuple[PersonnelEntry, ...] = field(default_factory=tuple)
    work_logs: tuple[WorkLogEntry, ...] = field(default_factory=tuple)
    constraints: tuple[ConstraintEntry, ...] = field(default_factory=tuple)
    report_id: str = ""
    project_location: str = ""
    manager_name: str = ""

    def __post_init__(self) -> None:
        validate_sheet_name(self.report_date)
        if self.total_headcount < 0:
            raise InvalidReportError("total_headcount must not be negative")

        # Freeze the sequences so the report can't change under the writer
        object.__setattr__(self, "personnel", tuple(self.personnel))
        object.__setattr__(self, "work_logs", tuple(self.work_logs))
        object.__setattr__(self, "constraints", tuple(self.constraints))

    @property
    def task_row_count(self) -> int:
        """Rows in the combined tasks/constraints table."""
        return max(len(self.work_logs), len(self.constraints))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DailyReport:
        """Build a report from a JSON payload (camelCase or snake_case keys)."""
        try:
            total_headcount = int(_pick(data, "totalHeadcount", "total_headcount", default=0))
        except (TypeError, ValueError) as e:
            raise InvalidReportError(f"totalHeadcount is not an integer: {e}") from e

        return cls(
            report_date=str(_pick(data, "reportDate", "report_date", default="")),
            project_name=_pick(data, "projectName", "project_name", default=""),
            total_headcount=total_headcount,
            total_regular_hours=_pick(data, "totalRegularHours", "total_regular_hours", default=0),
            total_overtime_hours=_pick(
                data, "totalOvertimeHours", "total_overtime_hours", default=0
            ),
            personnel=tuple(PersonnelEntry.from_dict(p) for p in data.get("personnel") or []),
            work_logs=tuple(
                WorkLogEntry.from_dict(w)
                for w in _pick(data, "workLogs", "work_logs", default=[])
            ),
            constraints=tuple(ConstraintEntry.from_dict(c) for c in data.get("constraints") or []),
            report_id=_pick(data, "reportId", "report_id", default=""),
            project_location=_pick(data, "projectLocation", "project_location", default=""),
            manager_name=_pick(data, "managerName", "manager_name", default=""),
        )


@dataclass(frozen=True)
class SheetTarget:
    """Where a report was written: spreadsheet, tab title and numeric tab id."""

    spreadsheet_id: str
    sheet_name: str
    sheet_id: int
