"""Push Google Ads reports into Google Sheets.

WHAT:
    Decodes metric DTOs into records and lays them out as a header plus one
    row per DTO, using the same column ordering and cell formatting as the
    CSV download, then replaces the contents of a spreadsheet tab.

REFERENCES:
    adsreport/services/csv_export.py (iter_rows)
    adsreport/services/google_sheets_client.py
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from pydantic import BaseModel

from adsreport.schemas import AccountMetrics, CampaignMetrics, MetricsPerDay
from adsreport.services.csv_export import iter_rows
from adsreport.services.google_sheets_client import GSheetsClient
from adsreport.services.records import to_records

logger = logging.getLogger(__name__)


def to_grid(items: Iterable[BaseModel]) -> List[List[str]]:
    """Header row plus one row per item; no items gives an empty grid."""
    return list(iter_rows(to_records(items), allow_empty=True))


class SheetsReportService:
    """Sheets use cases. Each returns the number of data rows written."""

    def __init__(self, client: GSheetsClient) -> None:
        self._client = client

    def _push(self, spreadsheet_id: str, tab: str, items: Iterable[BaseModel], kind: str) -> int:
        grid = to_grid(items)
        rows = max(len(grid) - 1, 0)
        logger.info("[SHEETS] Pushing %d %s rows to %s/%s", rows, kind, spreadsheet_id, tab)
        self._client.replace_tab(spreadsheet_id, tab, grid)
        return rows

    def campaign_metrics_to_sheets(
        self, spreadsheet_id: str, tab: str, metrics: List[CampaignMetrics]
    ) -> int:
        return self._push(spreadsheet_id, tab, metrics, "campaign")

    def account_metrics_to_sheets(
        self, spreadsheet_id: str, tab: str, metrics: List[AccountMetrics]
    ) -> int:
        return self._push(spreadsheet_id, tab, metrics, "account")

    def total_per_day_to_sheet(
        self, spreadsheet_id: str, tab: str, metrics: List[MetricsPerDay]
    ) -> int:
        return self._push(spreadsheet_id, tab, metrics, "per-day")
