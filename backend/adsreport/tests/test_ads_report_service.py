"""Unit tests for the Google Ads report use cases.

WHAT:
    GAQL construction and mapping of SDK rows into DTOs, using
    SimpleNamespace rows shaped like GoogleAdsRow.
"""

import types
from datetime import date

import pytest

from adsreport.services.ads_report_service import GoogleAdsReportService


def _mk_row(ns_dict):
    # Build a nested SimpleNamespace mock similar to SDK rows
    return types.SimpleNamespace(**ns_dict)


def _metrics(**overrides):
    values = dict(
        impressions=1000,
        clicks=50,
        ctr=0.05,
        average_cpc=250000,
        cost_micros=12500000,
        conversions=3.0,
        conversions_value=150.0,
    )
    values.update(overrides)
    return types.SimpleNamespace(**values)


@pytest.fixture
def service(ads_client):
    return GoogleAdsReportService(ads_client)


def test_campaign_metrics_maps_rows(fake_ads_sdk, service):
    fake_ads_sdk.ga_service.add("FROM campaign", [
        _mk_row({
            "campaign": types.SimpleNamespace(
                id=42,
                name="Brand Search",
                status=types.SimpleNamespace(name="ENABLED"),
                advertising_channel_type="SEARCH",
            ),
            "metrics": _metrics(),
        })
    ])
    out = service.get_campaign_metrics("123-456-7890", date(2024, 10, 1), date(2024, 10, 31))
    assert len(out) == 1
    m = out[0]
    assert m.customer_id == "1234567890"
    assert m.campaign_id == "42"
    assert m.status == "ENABLED"
    assert m.channel_type == "SEARCH"
    assert m.cost == 12.5
    assert m.average_cpc == 0.25
    assert m.clicks == 50

    _, query = fake_ads_sdk.ga_service.queries[0]
    assert "segments.date BETWEEN '2024-10-01' AND '2024-10-31'" in query
    assert "campaign.status IN ('ENABLED', 'PAUSED')" in query


def test_campaign_metrics_active_only_and_default_period(fake_ads_sdk, service):
    service.get_campaign_metrics("1234567890", active=True)
    _, query = fake_ads_sdk.ga_service.queries[0]
    assert "campaign.status = 'ENABLED'" in query
    assert "segments.date DURING LAST_30_DAYS" in query


def test_campaign_metrics_handles_missing_metric_values(fake_ads_sdk, service):
    fake_ads_sdk.ga_service.add("FROM campaign", [
        _mk_row({
            "campaign": types.SimpleNamespace(id=1, name="Zero", status=None, advertising_channel_type=None),
            "metrics": _metrics(impressions=None, clicks=None, cost_micros=None, ctr=None, conversions=None),
        })
    ])
    m = service.get_campaign_metrics("1234567890")[0]
    assert (m.impressions, m.clicks, m.cost, m.ctr, m.conversions) == (0, 0, 0.0, 0.0, 0.0)
    assert m.status is None


def test_invalid_date_range_raises_value_error(service):
    with pytest.raises(ValueError):
        service.get_campaign_metrics("1234567890", date(2024, 10, 2), date(2024, 10, 1))
    with pytest.raises(ValueError):
        service.get_account_metrics("1234567890", date(2024, 10, 2), None)


def test_account_metrics_maps_rows(fake_ads_sdk, service):
    fake_ads_sdk.ga_service.add("FROM customer", [
        _mk_row({
            "customer": types.SimpleNamespace(id=1234567890, descriptive_name="Acme Shoes", currency_code="BRL"),
            "metrics": _metrics(),
        })
    ])
    out = service.get_account_metrics("1234567890", date(2024, 10, 1), date(2024, 10, 7))
    assert out[0].descriptive_name == "Acme Shoes"
    assert out[0].currency_code == "BRL"
    assert out[0].start_date == date(2024, 10, 1)
    assert out[0].conversions_value == 150.0


def test_total_per_day_maps_dates(fake_ads_sdk, service):
    fake_ads_sdk.ga_service.add("FROM customer", [
        _mk_row({"segments": types.SimpleNamespace(date="2024-10-01"), "metrics": _metrics(clicks=1)}),
        _mk_row({"segments": types.SimpleNamespace(date="2024-10-02"), "metrics": _metrics(clicks=2)}),
    ])
    out = service.get_total_per_day("1234567890", date(2024, 10, 1), date(2024, 10, 2))
    assert [d.date for d in out] == [date(2024, 10, 1), date(2024, 10, 2)]
    assert [d.clicks for d in out] == [1, 2]
    _, query = fake_ads_sdk.ga_service.queries[0]
    assert "ORDER BY segments.date" in query


def test_manager_account_lists_direct_clients(fake_ads_sdk, service):
    fake_ads_sdk.ga_service.add("FROM customer_client", [
        _mk_row({"customer_client": types.SimpleNamespace(
            id=1111111111, descriptive_name="MCC", manager=True, status="ENABLED", level=0)}),
        _mk_row({"customer_client": types.SimpleNamespace(
            id=2222222222, descriptive_name="Client A", manager=False,
            status=types.SimpleNamespace(name="ENABLED"), level=1)}),
    ])
    fake_ads_sdk.ga_service.add("FROM customer LIMIT 1", [
        _mk_row({"customer": types.SimpleNamespace(
            id=1111111111, descriptive_name="MCC", currency_code="USD",
            time_zone="America/Sao_Paulo", manager=True)}),
    ])
    info = service.get_manager_account("111-111-1111")
    assert info.customer_id == "1111111111"
    assert info.is_manager is True
    assert info.time_zone == "America/Sao_Paulo"
    assert [c.customer_id for c in info.clients] == ["2222222222"]
    assert info.clients[0].status == "ENABLED"


def test_non_manager_account_skips_client_query(fake_ads_sdk, service):
    fake_ads_sdk.ga_service.add("FROM customer LIMIT 1", [
        _mk_row({"customer": types.SimpleNamespace(
            id=3333333333, descriptive_name="Solo", currency_code="EUR", time_zone="Europe/Vienna", manager=False)}),
    ])
    info = service.get_manager_account("3333333333")
    assert info.clients == []
    assert len(fake_ads_sdk.ga_service.queries) == 1


def test_test_connection(fake_ads_sdk, service):
    fake_ads_sdk.customer_service.resource_names = ["customers/1234567890"]
    result = service.test_connection()
    assert result.status == "ok"
    assert result.accessible_customers == ["1234567890"]
