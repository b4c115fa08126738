"""Google Sheets client service abstraction.

WHAT:
    Thin wrapper around the Sheets v4 values API: clear a tab and write a
    grid of values starting at A1.

WHY:
    Keeps googleapiclient details out of the use cases; tests inject a fake
    service object with the same ``spreadsheets().values()`` chain.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List, Sequence

from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from adsreport.errors import SheetsApiError

if TYPE_CHECKING:
    from adsreport.deps import Settings

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def tab_range(tab: str, cell: str = "") -> str:
    """Return an A1 range for a tab, quoting the name ('My Tab'!A1)."""
    quoted = "'" + tab.replace("'", "''") + "'"
    return f"{quoted}!{cell}" if cell else quoted


class GSheetsClient:
    """Testable wrapper around the Sheets v4 API."""

    def __init__(self, service: Any) -> None:
        self._service = service

    @classmethod
    def from_settings(cls, settings: "Settings") -> "GSheetsClient":
        """Build from the service-account file in GOOGLE_SHEETS_CREDENTIALS_FILE."""
        keyfile = settings.GOOGLE_SHEETS_CREDENTIALS_FILE
        if not keyfile:
            raise ValueError("Missing required setting: GOOGLE_SHEETS_CREDENTIALS_FILE")
        creds = Credentials.from_service_account_file(keyfile, scopes=SCOPES)
        return cls(build("sheets", "v4", credentials=creds, cache_discovery=False))

    def _values(self):
        return self._service.spreadsheets().values()

    def clear_tab(self, spreadsheet_id: str, tab: str) -> None:
        try:
            self._values().clear(
                spreadsheetId=spreadsheet_id,
                range=tab_range(tab),
                body={},
            ).execute()
        except HttpError as exc:
            status = getattr(getattr(exc, "resp", None), "status", None)
            logger.exception("[SHEETS] Clearing %s/%s failed (status=%s)", spreadsheet_id, tab, status)
            raise SheetsApiError(status=status) from exc

    def write_values(self, spreadsheet_id: str, tab: str, values: Sequence[Sequence[str]]) -> int:
        """Write ``values`` from A1 of ``tab``. Returns the number of updated rows.

        Values are stored as entered (RAW), so text such as ``=SUM(A1)`` is
        never evaluated as a formula.
        """
        try:
            response = self._values().update(
                spreadsheetId=spreadsheet_id,
                range=tab_range(tab, "A1"),
                valueInputOption="RAW",
                body={"values": [list(row) for row in values]},
            ).execute()
        except HttpError as exc:
            status = getattr(getattr(exc, "resp", None), "status", None)
            logger.exception("[SHEETS] Writing %s/%s failed (status=%s)", spreadsheet_id, tab, status)
            raise SheetsApiError(status=status) from exc
        updated = (response or {}).get("updatedRows", len(values))
        logger.info("[SHEETS] Wrote %s rows to %s/%s", updated, spreadsheet_id, tab)
        return updated

    def replace_tab(self, spreadsheet_id: str, tab: str, values: List[List[str]]) -> int:
        """Clear ``tab`` then write ``values``; an empty grid only clears."""
        self.clear_tab(spreadsheet_id, tab)
        if not values:
            return 0
        return self.write_values(spreadsheet_id, tab, values)
