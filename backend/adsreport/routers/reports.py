"""Report endpoints.

WHAT:
    Thin HTTP wrappers for the Google Ads report use cases: JSON lookups,
    CSV downloads and pushes into Google Sheets.

WHY:
    - Routers focus on request parsing and HTTP error mapping.
    - Query and mapping logic lives in the service layer.

REFERENCES:
    - adsreport/services/ads_report_service.py
    - adsreport/services/sheets_report_service.py
    - adsreport/services/csv_export.py
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Iterable, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from adsreport.deps import Settings, get_ads_report_service, get_settings, get_sheets_report_service
from adsreport.errors import AdsApiError, EmptyInputError, SerializationError, SheetsApiError
from adsreport.schemas import ConnectionTestResponse, ManagerAccountInfo, SheetsWriteResponse
from adsreport.services.ads_report_service import GoogleAdsReportService
from adsreport.services.csv_export import iter_csv_chunks
from adsreport.services.records import to_records
from adsreport.services.sheets_report_service import SheetsReportService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/reports", tags=["Reports"])

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(name: str) -> str:
    """Replace characters that would break a Content-Disposition header."""
    return _UNSAFE_FILENAME_CHARS.sub("_", name).strip("_") or "report"


def http_error(exc: Exception) -> HTTPException:
    """Map service errors to HTTP errors."""
    if isinstance(exc, EmptyInputError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No metrics found for the requested period")
    if isinstance(exc, SheetsApiError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.to_user_message())
    if isinstance(exc, AdsApiError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.to_user_message())
    if isinstance(exc, SerializationError):
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.to_user_message())
    if isinstance(exc, ValueError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


def csv_attachment(items: Iterable[BaseModel], filename: str, delimiter: str) -> StreamingResponse:
    """Stream DTOs as a CSV attachment."""
    chunks = iter_csv_chunks(to_records(items), delimiter=delimiter)
    return StreamingResponse(
        chunks,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/test", response_model=ConnectionTestResponse)
def test_connection(
    ads: GoogleAdsReportService = Depends(get_ads_report_service),
) -> ConnectionTestResponse:
    """Check the connection between the service and the Google Ads account."""
    try:
        return ads.test_connection()
    except AdsApiError as exc:
        raise http_error(exc)


@router.get("/manager/{customer_id}", response_model=ManagerAccountInfo)
def get_manager_account(
    customer_id: str,
    ads: GoogleAdsReportService = Depends(get_ads_report_service),
) -> ManagerAccountInfo:
    """General data of a manager (MCC) account and its direct clients."""
    try:
        return ads.get_manager_account(customer_id)
    except AdsApiError as exc:
        raise http_error(exc)


@router.get("/csv/campaign/{customer_id}")
def campaign_metrics_csv(
    customer_id: str,
    start_date: Optional[date] = Query(default=None, description="Period start (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(default=None, description="Period end (YYYY-MM-DD)"),
    active: bool = Query(default=False, description="Only ENABLED campaigns"),
    ads: GoogleAdsReportService = Depends(get_ads_report_service),
    settings: Settings = Depends(get_settings),
) -> StreamingResponse:
    """Download campaign metrics as CSV."""
    logger.info("[REPORTS] Campaign CSV requested: customer=%s start=%s end=%s active=%s",
                customer_id, start_date, end_date, active)
    try:
        metrics = ads.get_campaign_metrics(customer_id, start_date, end_date, active)
        return csv_attachment(
            metrics,
            safe_filename(f"campaigns-{customer_id}") + ".csv",
            settings.CSV_DELIMITER,
        )
    except (EmptyInputError, SerializationError, AdsApiError, ValueError) as exc:
        raise http_error(exc)


@router.get("/csv/account/{customer_id}")
def account_metrics_csv(
    customer_id: str,
    start_date: date = Query(..., description="Period start (YYYY-MM-DD)"),
    end_date: date = Query(..., description="Period end (YYYY-MM-DD)"),
    ads: GoogleAdsReportService = Depends(get_ads_report_service),
    settings: Settings = Depends(get_settings),
) -> StreamingResponse:
    """Download aggregated metrics of one client account as CSV."""
    logger.info("[REPORTS] Account CSV requested: customer=%s start=%s end=%s",
                customer_id, start_date, end_date)
    try:
        metrics = ads.get_account_metrics(customer_id, start_date, end_date)
        if not metrics:
            raise EmptyInputError()
        name = metrics[0].descriptive_name or metrics[0].customer_id
        filename = safe_filename(f"account-metrics-{name}-{start_date}-{end_date}") + ".csv"
        return csv_attachment(metrics, filename, settings.CSV_DELIMITER)
    except (EmptyInputError, SerializationError, AdsApiError, ValueError) as exc:
        raise http_error(exc)


@router.get("/sheets/campaign/{customer_id}", response_model=SheetsWriteResponse)
def campaign_metrics_to_sheets(
    customer_id: str,
    spreadsheet_id: str = Query(..., description="Target spreadsheet id"),
    tab: str = Query(..., description="Target tab name"),
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    active: bool = Query(default=False),
    ads: GoogleAdsReportService = Depends(get_ads_report_service),
    sheets: SheetsReportService = Depends(get_sheets_report_service),
) -> SheetsWriteResponse:
    """Send campaign metrics straight from Google Ads to a spreadsheet tab."""
    try:
        metrics = ads.get_campaign_metrics(customer_id, start_date, end_date, active)
        rows = sheets.campaign_metrics_to_sheets(spreadsheet_id, tab, metrics)
    except (SheetsApiError, AdsApiError, SerializationError, ValueError) as exc:
        raise http_error(exc)
    return SheetsWriteResponse(spreadsheet_id=spreadsheet_id, tab=tab, rows_written=rows)


@router.get("/sheets/account/{customer_id}", response_model=SheetsWriteResponse)
def account_metrics_to_sheets(
    customer_id: str,
    spreadsheet_id: str = Query(...),
    tab: str = Query(...),
    start_date: date = Query(...),
    end_date: date = Query(...),
    ads: GoogleAdsReportService = Depends(get_ads_report_service),
    sheets: SheetsReportService = Depends(get_sheets_report_service),
) -> SheetsWriteResponse:
    """Send client account metrics to a spreadsheet tab."""
    try:
        metrics = ads.get_account_metrics(customer_id, start_date, end_date)
        rows = sheets.account_metrics_to_sheets(spreadsheet_id, tab, metrics)
    except (SheetsApiError, AdsApiError, SerializationError, ValueError) as exc:
        raise http_error(exc)
    return SheetsWriteResponse(spreadsheet_id=spreadsheet_id, tab=tab, rows_written=rows)


@router.get("/sheets/campaign/days/{customer_id}", response_model=SheetsWriteResponse)
def total_per_day_to_sheet(
    customer_id: str,
    spreadsheet_id: str = Query(...),
    tab: str = Query(...),
    start_date: date = Query(...),
    end_date: date = Query(...),
    ads: GoogleAdsReportService = Depends(get_ads_report_service),
    sheets: SheetsReportService = Depends(get_sheets_report_service),
) -> SheetsWriteResponse:
    """Send account metrics split per day to a spreadsheet tab."""
    try:
        metrics = ads.get_total_per_day(customer_id, start_date, end_date)
        rows = sheets.total_per_day_to_sheet(spreadsheet_id, tab, metrics)
    except (SheetsApiError, AdsApiError, SerializationError, ValueError) as exc:
        raise http_error(exc)
    return SheetsWriteResponse(spreadsheet_id=spreadsheet_id, tab=tab, rows_written=rows)
