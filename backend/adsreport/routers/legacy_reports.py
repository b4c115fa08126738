"""Legacy report endpoints under /api/reports.

Kept for clients of the first API version; new clients use /v1/reports.
"""

from __future__ import annotations

from typing import Dict, List

from fastapi import APIRouter, Depends

from adsreport.deps import get_ads_report_service
from adsreport.errors import AdsApiError
from adsreport.routers.reports import http_error
from adsreport.schemas import CampaignMetrics, ConnectionTestResponse
from adsreport.services.ads_report_service import GoogleAdsReportService

router = APIRouter(prefix="/api/reports", tags=["Reports (legacy)"])


@router.get("/test-app")
def test_app() -> Dict[str, str]:
    return {"status": "ok"}


@router.get("/test", response_model=ConnectionTestResponse)
def test_connection(
    ads: GoogleAdsReportService = Depends(get_ads_report_service),
) -> ConnectionTestResponse:
    try:
        return ads.test_connection()
    except AdsApiError as exc:
        raise http_error(exc)


@router.get("/{customer_id}", response_model=List[CampaignMetrics])
def get_all(
    customer_id: str,
    ads: GoogleAdsReportService = Depends(get_ads_report_service),
) -> List[CampaignMetrics]:
    """Campaign metrics for the last 30 days as JSON."""
    try:
        return ads.get_campaign_metrics(customer_id)
    except AdsApiError as exc:
        raise http_error(exc)
