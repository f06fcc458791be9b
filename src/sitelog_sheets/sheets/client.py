"""Google Sheets API client implementation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sitelog_sheets.google import GoogleOAuth
from sitelog_sheets.google.exceptions import AuthorizationRequired

logger = logging.getLogger(__name__)


@dataclass
class Sheet:
    """Represents a sheet (tab) within a spreadsheet."""

    id: int
    title: str
    index: int
    row_count: int = 1000
    column_count: int = 26


@dataclass
class Spreadsheet:
    """Represents a Google Spreadsheet."""

    id: str
    title: str
    sheets: list[Sheet] | None = None
    url: str | None = None

    def find_sheet(self, title: str) -> Sheet | None:
        """Get the sheet whose title matches exactly (case-sensitive)."""
        for sheet in self.sheets or []:
            if sheet.title == title:
                return sheet
        return None


class SheetsClient:
    """Google Sheets API client with OAuth authentication.

    Thin wrapper over the Sheets v4 API. Errors raised by googleapiclient
    (``HttpError``) and the HTTP transport are propagated to the caller.

    Usage:
        auth = GoogleOAuth.from_store(SecretStore())
        client = SheetsClient(auth)

        spreadsheet = client.get_spreadsheet(spreadsheet_id)
        sheet = client.add_sheet(spreadsheet_id, "2024-01-15")
        client.batch_write_values(
            spreadsheet_id, [{"range": "2024-01-15!A1:B1", "values": [["a", "b"]]}]
        )

    A prebuilt API service can be injected with ``service=`` instead of auth.
    """

    def __init__(self, auth: GoogleOAuth | None = None, service: Any = None) -> None:
        """Initialize Sheets client.

        Args:
            auth: OAuth manager used to build the Sheets service lazily.
            service: Prebuilt ``sheets`` v4 service object.
        """
        if auth is None and service is None:
            raise ValueError("SheetsClient needs an auth manager or a service")
        self._auth = auth
        self._service = service

    def _get_service(self) -> Any:
        """Get or create Sheets API service."""
        if self._service is None:
            if not self._auth.is_authorized():
                raise AuthorizationRequired(
                    self._auth.get_authorization_url(),
                    "Sheets API requires OAuth authorization. "
                    "Run 'sitelog-sheets google auth-url' to authorize.",
                )
            self._service = self._auth.build_service("sheets", "v4")
        return self._service

    # =========================================================================
    # Spreadsheets
    # =========================================================================

    def get_spreadsheet(self, spreadsheet_id: str) -> Spreadsheet:
        """Get spreadsheet metadata (title and tabs).

        Args:
            spreadsheet_id: Google Sheets spreadsheet ID.

        Returns:
            Spreadsheet with its sheets.
        """
        service = self._get_service()
        result = service.spreadsheets().get(spreadsheetId=spreadsheet_id).execute()
        return self._parse_spreadsheet(result)

    # =========================================================================
    # Reading Data
    # =========================================================================

    def read_range(
        self,
        spreadsheet_id: str,
        range_notation: str,
        value_render_option: str = "FORMATTED_VALUE",
    ) -> list[list[Any]]:
        """Read values from a range.

        Args:
            spreadsheet_id: Spreadsheet ID.
            range_notation: A1 notation (e.g., "hours log!A1:I1").
            value_render_option: How to render values ("FORMATTED_VALUE", "UNFORMATTED_VALUE", "FORMULA").

        Returns:
            2D list of cell values.
        """
        service = self._get_service()
        result = (
            service.spreadsheets()
            .values()
            .get(
                spreadsheetId=spreadsheet_id,
                range=range_notation,
                valueRenderOption=value_render_option,
            )
            .execute()
        )
        return result.get("values", [])

    # =========================================================================
    # Writing Data
    # =========================================================================

    def batch_write_values(
        self,
        spreadsheet_id: str,
        data: list[dict[str, Any]],
        value_input_option: str = "RAW",
    ) -> int:
        """Write several ranges in a single request.

        Args:
            spreadsheet_id: Spreadsheet ID.
            data: List of {"range": A1 notation, "values": 2D list}.
            value_input_option: How to interpret input ("RAW" or "USER_ENTERED").

        Returns:
            Total number of cells updated.
        """
        service = self._get_service()
        result = (
            service.spreadsheets()
            .values()
            .batchUpdate(
                spreadsheetId=spreadsheet_id,
                body={"valueInputOption": value_input_option, "data": data},
            )
            .execute()
        )
        return result.get("totalUpdatedCells", 0)

    def append_rows(
        self,
        spreadsheet_id: str,
        range_notation: str,
        values: list[list[Any]],
        value_input_option: str = "USER_ENTERED",
    ) -> int:
        """Append rows after the last row of a table.

        Args:
            spreadsheet_id: Spreadsheet ID.
            range_notation: Table range (e.g., "hours log!A:I").
            values: 2D list of rows to append.
            value_input_option: How to interpret input.

        Returns:
            Number of rows appended.
        """
        service = self._get_service()
        result = (
            service.spreadsheets()
            .values()
            .append(
                spreadsheetId=spreadsheet_id,
                range=range_notation,
                valueInputOption=value_input_option,
                insertDataOption="INSERT_ROWS",
                body={"values": values},
            )
            .execute()
        )
        updates = result.get("updates", {})
        return updates.get("updatedRows", 0)

    def clear_range(self, spreadsheet_id: str, range_notation: str) -> None:
        """Clear values (not formatting) from a range.

        Args:
            spreadsheet_id: Spreadsheet ID.
            range_notation: A1 notation (e.g., "2024-01-15" for a whole tab).
        """
        service = self._get_service()
        service.spreadsheets().values().clear(
            spreadsheetId=spreadsheet_id, range=range_notation, body={}
        ).execute()

    # =========================================================================
    # Sheet Management
    # =========================================================================

    def batch_update(self, spreadsheet_id: str, requests: list[dict[str, Any]]) -> dict[str, Any]:
        """Send structural requests (addSheet, repeatCell, ...) in one call.

        Args:
            spreadsheet_id: Spreadsheet ID.
            requests: Sheets API request objects.

        Returns:
            Raw batchUpdate response.
        """
        service = self._get_service()
        return (
            service.spreadsheets()
            .batchUpdate(spreadsheetId=spreadsheet_id, body={"requests": requests})
            .execute()
        )

    def add_sheet(self, spreadsheet_id: str, title: str) -> Sheet:
        """Add a new sheet to a spreadsheet.

        Args:
            spreadsheet_id: Spreadsheet ID.
            title: New sheet title.

        Returns:
            Created Sheet, with the id assigned by the backend.
        """
        result = self.batch_update(
            spreadsheet_id, [{"addSheet": {"properties": {"title": title}}}]
        )
        props = result["replies"][0]["addSheet"]["properties"]
        logger.info(f"Added sheet '{props['title']}' (id {props['sheetId']})")
        return Sheet(
            id=props["sheetId"],
            title=props["title"],
            index=props.get("index", 0),
        )

    def _parse_spreadsheet(self, data: dict) -> Spreadsheet:
        """Parse spreadsheet from API response."""
        sheets = []
        for sheet_data in data.get("sheets", []):
            props = sheet_data.get("properties", {})
            grid_props = props.get("gridProperties", {})
            sheets.append(
                Sheet(
                    id=props.get("sheetId", 0),
                    title=props.get("title", ""),
                    index=props.get("index", 0),
                    row_count=grid_props.get("rowCount", 1000),
                    column_count=grid_props.get("columnCount", 26),
                )
            )

        return Spreadsheet(
            id=data["spreadsheetId"],
            title=data.get("properties", {}).get("title", ""),
            sheets=sheets,
            url=data.get("spreadsheetUrl"),
        )
