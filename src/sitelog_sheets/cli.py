"""CLI for sitelog-sheets - OAuth setup and report writing.

Usage:
    sitelog-sheets status                         # Show secret availability
    sitelog-sheets google auth-url                # Print OAuth consent URL
    sitelog-sheets google exchange <url-or-code>  # Trade code for refresh token
    sitelog-sheets google status                  # Show OAuth token status
    sitelog-sheets test-connection [URL]          # Read spreadsheet metadata
    sitelog-sheets write-report <report.json> [URL]
    sitelog-sheets write-sample [URL]             # Write a built-in sample report
    sitelog-sheets hours-log append <report.json> [URL]
    sitelog-sheets hours-log check [URL]          # Show the hours log header

URL defaults to the spreadsheet in the sitelogix/google-sheets secret.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

SAMPLE_REPORT = {
    "reportId": "test_rpt_20251117",
    "reportDate": "2025-11-17",
    "projectName": "Test Construction Site",
    "managerName": "Test Manager",
    "totalHeadcount": 3,
    "totalRegularHours": 24,
    "totalOvertimeHours": 6,
    "personnel": [
        {
            "employeeNumber": "1001",
            "fullName": "John Smith",
            "goByName": "John",
            "position": "Foreman",
            "teamAssignment": "T1",
            "hoursWorked": 8,
            "overtimeHours": 2,
        },
        {
            "employeeNumber": "1002",
            "fullName": "Jane Doe",
            "goByName": "Jane",
            "position": "Carpenter",
            "teamAssignment": "T1",
            "hoursWorked": 8,
            "overtimeHours": 0,
        },
        {
            "employeeId": "1003",
            "firstName": "Bob",
            "lastName": "Johnson",
            "role": "Electrician",
            "teamAssignment": "T2",
            "healthStatus": "Light duty",
            "regularHours": 8,
            "overtimeHours": 4,
        },
    ],
    "workLogs": [
        {"teamId": "T1", "taskDescription": "Frame second floor walls"},
        {"teamId": "T2", "taskDescription": "Rough-in electrical, units 3-4"},
    ],
    "constraints": [
        {"level": "Medium", "description": "Lumber delivery delayed until noon"},
    ],
}


def _load_auth():
    from sitelog_sheets.google import GoogleOAuth
    from sitelog_sheets.secrets import SecretStore

    return GoogleOAuth.from_store(SecretStore())


def _build_client():
    from sitelog_sheets.sheets import SheetsClient

    return SheetsClient(_load_auth())


def _resolve_url(url: str | None) -> str:
    """Use the given URL, else the spreadsheet from the sheets secret."""
    if url:
        return url

    from sitelog_sheets.config import GOOGLE_SHEETS_SECRET
    from sitelog_sheets.secrets import InvalidSecretError, SecretStore

    secret = SecretStore().get(GOOGLE_SHEETS_SECRET)
    value = secret.get("spreadsheet_url") or secret.get("spreadsheet_id")
    if not value:
        raise InvalidSecretError(
            f"Secret '{GOOGLE_SHEETS_SECRET}' needs spreadsheet_url or spreadsheet_id"
        )
    return value


def _load_report(path: str):
    from sitelog_sheets.report import DailyReport

    with open(Path(path).expanduser()) as f:
        return DailyReport.from_dict(json.load(f))


def cmd_status() -> int:
    """Show status of configured secrets."""
    from sitelog_sheets.config import get_credential_status

    status = get_credential_status()

    print("=" * 60)
    print("SITELOG-SHEETS CREDENTIAL STATUS")
    print("=" * 60)
    print()
    print(f"Repository:  {status['repo_root']}")
    print(f"Secrets dir: {status['secrets_dir']}")
    print(f".env:        {'[x]' if status['env_file'] else '[ ]'}")
    print()
    print("Secrets:")
    for name, available in status["secrets"].items():
        print(f"  {'[x]' if available else '[ ]'} {name}")
    print()
    return 0


def google_auth_url() -> int:
    """Print the OAuth consent URL."""
    from sitelog_sheets.google import GoogleAuthError
    from sitelog_sheets.secrets import SecretError

    try:
        auth = _load_auth()
    except (GoogleAuthError, SecretError) as e:
        print(f"Error: {e}")
        return 1

    print("Visit this URL and grant access:")
    print()
    print(auth.get_authorization_url())
    print()
    print("Then run: sitelog-sheets google exchange '<redirect URL>'")
    return 0


def google_exchange(value: str) -> int:
    """Exchange an authorization code (or redirect URL) for tokens."""
    from sitelog_sheets.google import GoogleAuthError
    from sitelog_sheets.secrets import SecretError

    try:
        auth = _load_auth()
        if value.startswith("http"):
            token = auth.fetch_token(authorization_response=value)
        else:
            token = auth.fetch_token(code=value)
    except (GoogleAuthError, SecretError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    refresh_token = token.get("refresh_token")
    if not refresh_token:
        print("No refresh token returned; revoke app access and try again")
        return 1

    print("Authorization complete. Store this in the sitelogix/google-oauth secret:")
    print()
    print(f'  "refresh_token": "{refresh_token}"')
    return 0


def google_status() -> int:
    """Show Google OAuth token status."""
    from sitelog_sheets.google import GoogleAuthError
    from sitelog_sheets.secrets import SecretError

    try:
        auth = _load_auth()
        if auth.is_authorized():
            auth.get_credentials()  # Triggers refresh
    except (GoogleAuthError, SecretError) as e:
        print(f"Error: {e}")
        return 1

    info = auth.get_token_info()
    if info["status"] == "no_token":
        print("No refresh token - run 'sitelog-sheets google auth-url'")
        return 1

    print(f"Status     : {info['status']}")
    print(f"Scopes     : {', '.join(info.get('scopes', []))}")
    print(f"Expires in : {info.get('expires_in', 'unknown')}")
    print(f"Refreshed  : {info.get('last_refresh') or 'never'}")
    return 0


def google_revoke() -> int:
    """Revoke the stored refresh token at Google."""
    from sitelog_sheets.google import GoogleAuthError
    from sitelog_sheets.secrets import SecretError

    try:
        auth = _load_auth()
    except (GoogleAuthError, SecretError) as e:
        print(f"Error: {e}")
        return 1

    if not auth.is_authorized():
        print("No refresh token to revoke")
        return 1

    auth.revoke_token()
    print("Token revoked. Remove refresh_token from the sitelogix/google-oauth secret.")
    return 0


def cmd_test_connection(url: str | None) -> int:
    """Test Sheets access for a spreadsheet."""
    from sitelog_sheets.report import ReportWriter

    print("=" * 60)
    print("GOOGLE SHEETS CONNECTION TEST")
    print("=" * 60)

    try:
        target = _resolve_url(url)
        writer = ReportWriter(_build_client())
    except Exception as e:
        print(f"\n[✗] {e}")
        return 1

    if writer.test_connection(target):
        print("\n[✓] Connected")
        return 0
    print("\n[✗] Connection test failed - see log output")
    return 1


def _write(report, url: str | None, clear_existing: bool) -> int:
    from sitelog_sheets.report import ReportWriter

    try:
        target = _resolve_url(url)
        writer = ReportWriter(_build_client())
        result = writer.write_daily_report(target, report, clear_existing=clear_existing)
    except Exception as e:
        print(f"Error: {e}")
        return 1

    action = "Created" if result.created else "Updated"
    print(f"{action} sheet '{result.target.sheet_name}' (id {result.target.sheet_id})")
    print(f"  Cells updated: {result.updated_cells}")
    if result.formatting.applied:
        print("  Formatting:    applied")
    else:
        print(f"  Formatting:    skipped ({result.formatting.error})")
    return 0


def cmd_write_report(path: str, url: str | None, clear_existing: bool) -> int:
    """Write a report JSON file."""
    from sitelog_sheets.report import InvalidReportError

    try:
        report = _load_report(path)
    except (OSError, json.JSONDecodeError, InvalidReportError) as e:
        print(f"Error: {e}")
        return 1
    return _write(report, url, clear_existing)


def cmd_write_sample(url: str | None) -> int:
    """Write the built-in sample report."""
    from sitelog_sheets.report import DailyReport

    return _write(DailyReport.from_dict(SAMPLE_REPORT), url, clear_existing=False)


def hours_log_append(path: str, url: str | None) -> int:
    """Append a report's personnel hours to the hours log."""
    from sitelog_sheets.report import HoursLogWriter, extract_spreadsheet_id

    try:
        report = _load_report(path)
        spreadsheet_id = extract_spreadsheet_id(_resolve_url(url))
        appended = HoursLogWriter(_build_client()).append_report(spreadsheet_id, report)
    except Exception as e:
        print(f"Error: {e}")
        return 1

    print(f"Appended {appended} rows to the hours log")
    return 0


def hours_log_check(url: str | None, rows: int = 10) -> int:
    """Show the first rows of the hours log."""
    from sitelog_sheets.report import HoursLogWriter, extract_spreadsheet_id
    from sitelog_sheets.report.hours_log import HOURS_LOG_HEADERS

    try:
        spreadsheet_id = extract_spreadsheet_id(_resolve_url(url))
        values = HoursLogWriter(_build_client()).read_rows(spreadsheet_id, rows=rows)
    except Exception as e:
        print(f"Error: {e}")
        return 1

    if not values:
        print("Sheet is empty")
        return 0

    print(f"First {rows} rows of the hours log:")
    print()
    for index, row in enumerate(values, start=1):
        print(f"Row {index}: {row}")

    header = values[0]
    if header != HOURS_LOG_HEADERS:
        print()
        print(f"Expected header: {HOURS_LOG_HEADERS}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="sitelog-sheets",
        description="Write daily site reports to Google Sheets",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable info logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    subparsers.add_parser("status", help="Show secret availability")

    # Google subcommand
    google_parser = subparsers.add_parser("google", help="Google OAuth management")
    google_subparsers = google_parser.add_subparsers(dest="google_command", help="Command")
    google_subparsers.add_parser("auth-url", help="Print the OAuth consent URL")
    exchange_parser = google_subparsers.add_parser(
        "exchange", help="Exchange authorization code for a refresh token"
    )
    exchange_parser.add_argument("value", help="Redirect URL or bare authorization code")
    google_subparsers.add_parser("status", help="Show token status")
    google_subparsers.add_parser("revoke", help="Revoke the refresh token")

    test_parser = subparsers.add_parser("test-connection", help="Test spreadsheet access")
    test_parser.add_argument("url", nargs="?", help="Spreadsheet URL")

    write_parser = subparsers.add_parser("write-report", help="Write a report JSON file")
    write_parser.add_argument("path", help="Path to report JSON")
    write_parser.add_argument("url", nargs="?", help="Spreadsheet URL")
    write_parser.add_argument(
        "--clear",
        action="store_true",
        help="Clear an existing tab's values before writing",
    )

    sample_parser = subparsers.add_parser("write-sample", help="Write a sample report")
    sample_parser.add_argument("url", nargs="?", help="Spreadsheet URL")

    # hours-log subcommand
    hours_parser = subparsers.add_parser("hours-log", help="Hours log tab")
    hours_subparsers = hours_parser.add_subparsers(dest="hours_command", help="Command")
    append_parser = hours_subparsers.add_parser("append", help="Append report hours")
    append_parser.add_argument("path", help="Path to report JSON")
    append_parser.add_argument("url", nargs="?", help="Spreadsheet URL")
    check_parser = hours_subparsers.add_parser("check", help="Show the first rows of the log")
    check_parser.add_argument("url", nargs="?", help="Spreadsheet URL")
    check_parser.add_argument("--rows", type=int, default=10, help="Rows to show (default: 10)")

    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "status":
        return cmd_status()

    if args.command == "google":
        if args.google_command == "auth-url":
            return google_auth_url()
        elif args.google_command == "exchange":
            return google_exchange(args.value)
        elif args.google_command == "status":
            return google_status()
        elif args.google_command == "revoke":
            return google_revoke()
        else:
            google_parser.print_help()
            return 0

    if args.command == "test-connection":
        return cmd_test_connection(args.url)

    if args.command == "write-report":
        return cmd_write_report(args.path, args.url, args.clear)

    if args.command == "write-sample":
        return cmd_write_sample(args.url)

    if args.command == "hours-log":
        if args.hours_command == "append":
            return hours_log_append(args.path, args.url)
        elif args.hours_command == "check":
            return hours_log_check(args.url, args.rows)
        else:
            hours_parser.print_help()
            return 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
