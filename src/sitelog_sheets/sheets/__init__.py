"""Google Sheets API client with OAuth authentication.

Usage:
    from sitelog_sheets.google import GoogleOAuth
    from sitelog_sheets.secrets import SecretStore
    from sitelog_sheets.sheets import SheetsClient

    client = SheetsClient(GoogleOAuth.from_store(SecretStore()))

    # Spreadsheet metadata
    spreadsheet = client.get_spreadsheet(spreadsheet_id)

    # Write several ranges at once
    client.batch_write_values(spreadsheet_id, [{"range": "Tab!A1", "values": [["x"]]}])

OAuth Setup:
    1. Store client_id/client_secret in the sitelogix/google-oauth secret
    2. Run: sitelog-sheets google auth-url
    3. Run: sitelog-sheets google exchange <redirect-url>
       and save the printed refresh_token in the same secret
"""

from __future__ import annotations

from sitelog_sheets.sheets.client import Sheet, SheetsClient, Spreadsheet

__all__ = ["SheetsClient", "Spreadsheet", "Sheet"]
