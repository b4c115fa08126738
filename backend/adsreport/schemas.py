"""Pydantic schemas for request/response payloads."""

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service status", example="ok")


class ConnectionTestResponse(BaseModel):
    """Result of a Google Ads connectivity check."""

    status: str = Field(description="ok when the API answered", example="ok")
    accessible_customers: List[str] = Field(
        default_factory=list,
        description="Customer ids reachable with the configured credentials",
        example=["1234567890"],
    )


class ClientAccount(BaseModel):
    """A client account linked under a manager (MCC) account."""

    customer_id: str = Field(description="Client customer id (digits only)", example="1234567890")
    descriptive_name: Optional[str] = Field(default=None, description="Account name", example="Acme Shoes")
    is_manager: bool = Field(default=False, description="True if the client is itself a manager")
    status: Optional[str] = Field(default=None, description="Account status", example="ENABLED")
    level: Optional[int] = Field(default=None, description="Depth under the manager (0 = manager itself)")


class ManagerAccountInfo(BaseModel):
    """General information about a manager account and its clients."""

    customer_id: str = Field(description="Manager customer id", example="1234567890")
    descriptive_name: Optional[str] = Field(default=None, description="Account name")
    currency_code: Optional[str] = Field(default=None, description="Account currency", example="BRL")
    time_zone: Optional[str] = Field(default=None, description="Account time zone", example="America/Sao_Paulo")
    is_manager: bool = Field(default=False, description="True for MCC accounts")
    clients: List[ClientAccount] = Field(default_factory=list, description="Linked client accounts")


class CampaignMetrics(BaseModel):
    """Aggregated metrics for one campaign over the requested period."""

    customer_id: str = Field(description="Owning customer id")
    campaign_id: str = Field(description="Campaign id")
    campaign_name: Optional[str] = Field(default=None, description="Campaign name")
    status: Optional[str] = Field(default=None, description="Campaign status", example="ENABLED")
    channel_type: Optional[str] = Field(default=None, description="Advertising channel", example="SEARCH")
    impressions: int = Field(default=0, description="Impressions")
    clicks: int = Field(default=0, description="Clicks")
    ctr: float = Field(default=0.0, description="Click-through rate (0-1)")
    average_cpc: float = Field(default=0.0, description="Average cost per click, currency units")
    cost: float = Field(default=0.0, description="Spend, currency units")
    conversions: float = Field(default=0.0, description="Conversions")
    conversions_value: float = Field(default=0.0, description="Conversion value, currency units")


class AccountMetrics(BaseModel):
    """Aggregated metrics for a whole client account."""

    customer_id: str = Field(description="Customer id")
    descriptive_name: Optional[str] = Field(default=None, description="Account name")
    currency_code: Optional[str] = Field(default=None, description="Account currency")
    start_date: Optional[dt.date] = Field(default=None, description="Period start (inclusive)")
    end_date: Optional[dt.date] = Field(default=None, description="Period end (inclusive)")
    impressions: int = Field(default=0, description="Impressions")
    clicks: int = Field(default=0, description="Clicks")
    ctr: float = Field(default=0.0, description="Click-through rate (0-1)")
    average_cpc: float = Field(default=0.0, description="Average cost per click, currency units")
    cost: float = Field(default=0.0, description="Spend, currency units")
    conversions: float = Field(default=0.0, description="Conversions")
    conversions_value: float = Field(default=0.0, description="Conversion value, currency units")


class MetricsPerDay(BaseModel):
    """Account totals for a single day."""

    date: dt.date = Field(description="Day the metrics belong to")
    impressions: int = Field(default=0, description="Impressions")
    clicks: int = Field(default=0, description="Clicks")
    cost: float = Field(default=0.0, description="Spend, currency units")
    conversions: float = Field(default=0.0, description="Conversions")
    conversions_value: float = Field(default=0.0, description="Conversion value, currency units")


class SheetsWriteResponse(BaseModel):
    """Result of pushing a report into a spreadsheet tab."""

    spreadsheet_id: str = Field(description="Target spreadsheet id")
    tab: str = Field(description="Target tab name")
    rows_written: int = Field(description="Data rows written, header excluded")
