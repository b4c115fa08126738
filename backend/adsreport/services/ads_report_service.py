"""Google Ads report use cases.

WHAT:
    Runs the GAQL queries behind each report and maps GoogleAdsRow objects
    into the pydantic DTOs returned by the API (campaign metrics, account
    metrics, per-day totals, manager account info).

WHY:
    Routers stay thin and never touch SDK rows; the CSV and Sheets paths
    share the same DTOs.

REFERENCES:
    adsreport/services/google_ads_client.py
    adsreport/schemas.py
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, List, Optional

from adsreport.schemas import (
    AccountMetrics,
    CampaignMetrics,
    ClientAccount,
    ConnectionTestResponse,
    ManagerAccountInfo,
    MetricsPerDay,
)
from adsreport.services.google_ads_client import GAdsClient, normalize_customer_id

logger = logging.getLogger(__name__)

MICROS = 1_000_000.0
DEFAULT_PERIOD = "LAST_30_DAYS"

CAMPAIGN_METRICS_QUERY = """
    SELECT
        campaign.id,
        campaign.name,
        campaign.status,
        campaign.advertising_channel_type,
        metrics.impressions,
        metrics.clicks,
        metrics.ctr,
        metrics.average_cpc,
        metrics.cost_micros,
        metrics.conversions,
        metrics.conversions_value
    FROM campaign
    WHERE {date_clause}
      AND {status_clause}
    ORDER BY campaign.name
"""

ACCOUNT_METRICS_QUERY = """
    SELECT
        customer.id,
        customer.descriptive_name,
        customer.currency_code,
        metrics.impressions,
        metrics.clicks,
        metrics.ctr,
        metrics.average_cpc,
        metrics.cost_micros,
        metrics.conversions,
        metrics.conversions_value
    FROM customer
    WHERE {date_clause}
"""

TOTAL_PER_DAY_QUERY = """
    SELECT
        segments.date,
        metrics.impressions,
        metrics.clicks,
        metrics.cost_micros,
        metrics.conversions,
        metrics.conversions_value
    FROM customer
    WHERE {date_clause}
    ORDER BY segments.date
"""

CUSTOMER_QUERY = (
    "SELECT customer.id, customer.descriptive_name, customer.currency_code, "
    "customer.time_zone, customer.manager FROM customer LIMIT 1"
)

CUSTOMER_CLIENTS_QUERY = (
    "SELECT customer_client.id, customer_client.descriptive_name, "
    "customer_client.manager, customer_client.status, customer_client.level "
    "FROM customer_client WHERE customer_client.level <= 1 "
    "ORDER BY customer_client.level, customer_client.descriptive_name"
)


def _enum_name(value: Any) -> Optional[str]:
    """Parse SDK enums properly (e.g., CampaignStatus.ENABLED -> "ENABLED")."""
    if value is None:
        return None
    if hasattr(value, "name"):
        return str(value.name)
    return str(value)


def _date_clause(start_date: Optional[date], end_date: Optional[date]) -> str:
    if start_date is None and end_date is None:
        return f"segments.date DURING {DEFAULT_PERIOD}"
    if start_date is None or end_date is None:
        raise ValueError("start_date and end_date must be given together")
    if start_date > end_date:
        raise ValueError(f"start_date {start_date} is after end_date {end_date}")
    return f"segments.date BETWEEN '{start_date.isoformat()}' AND '{end_date.isoformat()}'"


def _money(micros: Any) -> float:
    return (micros or 0) / MICROS


class GoogleAdsReportService:
    """Report use cases on top of GAdsClient."""

    def __init__(self, client: GAdsClient) -> None:
        self._client = client

    def test_connection(self) -> ConnectionTestResponse:
        customers = self._client.list_accessible_customers()
        logger.info("[GOOGLE_ADS] Connection ok, %d accessible customers", len(customers))
        return ConnectionTestResponse(status="ok", accessible_customers=customers)

    def get_manager_account(self, customer_id: str) -> ManagerAccountInfo:
        """Return general info for a manager account plus its direct clients."""
        cid = normalize_customer_id(customer_id)
        rows = self._client.search(cid, CUSTOMER_QUERY)
        customer = rows[0].customer if rows else None

        clients: List[ClientAccount] = []
        if customer is not None and getattr(customer, "manager", False):
            for r in self._client.search(cid, CUSTOMER_CLIENTS_QUERY):
                cc = r.customer_client
                level = getattr(cc, "level", None)
                # Level 0 is the manager itself
                if level == 0:
                    continue
                clients.append(ClientAccount(
                    customer_id=str(getattr(cc, "id", "")),
                    descriptive_name=getattr(cc, "descriptive_name", None) or None,
                    is_manager=bool(getattr(cc, "manager", False)),
                    status=_enum_name(getattr(cc, "status", None)),
                    level=level,
                ))

        return ManagerAccountInfo(
            customer_id=str(getattr(customer, "id", None) or cid),
            descriptive_name=getattr(customer, "descriptive_name", None) or None,
            currency_code=getattr(customer, "currency_code", None) or None,
            time_zone=getattr(customer, "time_zone", None) or None,
            is_manager=bool(getattr(customer, "manager", False)),
            clients=clients,
        )

    def get_campaign_metrics(
        self,
        customer_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        active: bool = False,
    ) -> List[CampaignMetrics]:
        """Return per-campaign totals for the period.

        Args:
            customer_id: Google Ads customer id (dashes allowed)
            start_date: Period start (inclusive); with end_date omitted too,
                        the last 30 days are used
            end_date: Period end (inclusive)
            active: If True, only ENABLED campaigns. Otherwise PAUSED
                    campaigns are included too; REMOVED are always excluded.
        """
        cid = normalize_customer_id(customer_id)
        if active:
            status_clause = "campaign.status = 'ENABLED'"
        else:
            status_clause = "campaign.status IN ('ENABLED', 'PAUSED')"
        q = CAMPAIGN_METRICS_QUERY.format(
            date_clause=_date_clause(start_date, end_date),
            status_clause=status_clause,
        )
        out: List[CampaignMetrics] = []
        for r in self._client.search(cid, q):
            c = r.campaign
            m = r.metrics
            out.append(CampaignMetrics(
                customer_id=cid,
                campaign_id=str(getattr(c, "id", "")),
                campaign_name=getattr(c, "name", None),
                status=_enum_name(getattr(c, "status", None)),
                channel_type=_enum_name(getattr(c, "advertising_channel_type", None)),
                impressions=int(m.impressions or 0),
                clicks=int(m.clicks or 0),
                ctr=float(getattr(m, "ctr", 0.0) or 0.0),
                average_cpc=_money(getattr(m, "average_cpc", 0)),
                cost=_money(m.cost_micros),
                conversions=float(getattr(m, "conversions", 0.0) or 0.0),
                conversions_value=float(getattr(m, "conversions_value", 0.0) or 0.0),
            ))
        logger.info("[GOOGLE_ADS] %d campaigns for customer=%s active=%s", len(out), cid, active)
        return out

    def get_account_metrics(
        self,
        customer_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[AccountMetrics]:
        """Return account totals for the period (one row per account)."""
        cid = normalize_customer_id(customer_id)
        q = ACCOUNT_METRICS_QUERY.format(date_clause=_date_clause(start_date, end_date))
        out: List[AccountMetrics] = []
        for r in self._client.search(cid, q):
            cust = r.customer
            m = r.metrics
            out.append(AccountMetrics(
                customer_id=str(getattr(cust, "id", None) or cid),
                descriptive_name=getattr(cust, "descriptive_name", None) or None,
                currency_code=getattr(cust, "currency_code", None) or None,
                start_date=start_date,
                end_date=end_date,
                impressions=int(m.impressions or 0),
                clicks=int(m.clicks or 0),
                ctr=float(getattr(m, "ctr", 0.0) or 0.0),
                average_cpc=_money(getattr(m, "average_cpc", 0)),
                cost=_money(m.cost_micros),
                conversions=float(getattr(m, "conversions", 0.0) or 0.0),
                conversions_value=float(getattr(m, "conversions_value", 0.0) or 0.0),
            ))
        return out

    def get_total_per_day(
        self,
        customer_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[MetricsPerDay]:
        """Return account totals split per day, oldest first."""
        cid = normalize_customer_id(customer_id)
        q = TOTAL_PER_DAY_QUERY.format(date_clause=_date_clause(start_date, end_date))
        out: List[MetricsPerDay] = []
        for r in self._client.search(cid, q):
            m = r.metrics
            out.append(MetricsPerDay(
                # segments.date comes back as "YYYY-MM-DD"
                date=str(r.segments.date),
                impressions=int(m.impressions or 0),
                clicks=int(m.clicks or 0),
                cost=_money(m.cost_micros),
                conversions=float(getattr(m, "conversions", 0.0) or 0.0),
                conversions_value=float(getattr(m, "conversions_value", 0.0) or 0.0),
            ))
        return out
