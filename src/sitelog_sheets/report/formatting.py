"""Formatting requests for the daily report tab.

Indices here are 0-based and end-exclusive, as the Sheets batchUpdate API
expects; the title block (rows 1-3) is rows 0..3 and the header row (row 7)
is 6..7.
"""

from __future__ import annotations

from typing import Any

TITLE_BACKGROUND = {"red": 1.0, "green": 0.75, "blue": 0.0}
HEADER_BACKGROUND = {"red": 0.85, "green": 0.85, "blue": 0.85}
FORMATTED_COLUMNS = 13
FROZEN_ROWS = 7
FIRST_COLUMN_WIDTH = 150


def _grid_range(sheet_id: int, start_row: int, end_row: int) -> dict[str, int]:
    return {
        "sheetId": sheet_id,
        "startRowIndex": start_row,
        "endRowIndex": end_row,
        "startColumnIndex": 0,
        "endColumnIndex": FORMATTED_COLUMNS,
    }


def build_format_requests(sheet_id: int) -> list[dict[str, Any]]:
    """Requests styling the title and header rows, freezing the header and sizing column A."""
    return [
        {
            "repeatCell": {
                "range": _grid_range(sheet_id, 0, 3),
                "cell": {
                    "userEnteredFormat": {
                        "backgroundColor": dict(TITLE_BACKGROUND),
                        "textFormat": {"bold": True, "fontSize": 14},
                    }
                },
                "fields": "userEnteredFormat(backgroundColor,textFormat)",
            }
        },
        {
            "repeatCell": {
                "range": _grid_range(sheet_id, 6, 7),
                "cell": {
                    "userEnteredFormat": {
                        "backgroundColor": dict(HEADER_BACKGROUND),
                        "textFormat": {"bold": True},
                        "horizontalAlignment": "CENTER",
                    }
                },
                "fields": "userEnteredFormat(backgroundColor,textFormat,horizontalAlignment)",
            }
        },
        {
            "updateSheetProperties": {
                "properties": {
                    "sheetId": sheet_id,
                    "gridProperties": {"frozenRowCount": FROZEN_ROWS},
                },
                "fields": "gridProperties.frozenRowCount",
            }
        },
        {
            "updateDimensionProperties": {
                "range": {
                    "sheetId": sheet_id,
                    "dimension": "COLUMNS",
                    "startIndex": 0,
                    "endIndex": 1,
                },
                "properties": {"pixelSize": FIRST_COLUMN_WIDTH},
                "fields": "pixelSize",
            }
        },
    ]
