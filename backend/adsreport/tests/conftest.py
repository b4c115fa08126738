"""Pytest configuration for adsreport tests

WHAT: Shared fakes for the Google Ads SDK and the Sheets API, plus app/client fixtures
WHY: Tests run the real service and router code without credentials or network
REFERENCES:
    - adsreport/main.py: FastAPI application
    - adsreport/deps.py: Dependency injection
    - adsreport/services/google_ads_client.py
    - adsreport/services/google_sheets_client.py
"""

import os
import types
from typing import Any, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

# Set test environment
os.environ.setdefault("GOOGLE_DEVELOPER_TOKEN", "test-developer-token")
os.environ.setdefault("GOOGLE_CLIENT_ID", "test-client-id")
os.environ.setdefault("GOOGLE_CLIENT_SECRET", "test-client-secret")
os.environ.setdefault("GOOGLE_REFRESH_TOKEN", "test-refresh-token")


# ============================================================================
# Google Ads SDK fakes
# ============================================================================

class FakeGoogleAdsService:
    """Mimics GoogleAdsService.search_stream.

    Responses are registered as (needle, rows); the first needle found in the
    GAQL query decides which rows come back.
    """

    def __init__(self):
        self.responses: List[Tuple[str, List[Any]]] = []
        self.queries: List[Tuple[str, str]] = []
        self.error: Optional[Exception] = None
        self.batch_size: Optional[int] = None

    def add(self, needle: str, rows: List[Any]) -> None:
        self.responses.append((needle, rows))

    def search_stream(self, customer_id, query):
        self.queries.append((customer_id, query))
        if self.error is not None:
            raise self.error
        for needle, rows in self.responses:
            if needle in query:
                size = self.batch_size or max(len(rows), 1)
                # Return batches with `.results` to simulate streaming
                return [
                    types.SimpleNamespace(results=rows[i:i + size])
                    for i in range(0, max(len(rows), 1), size)
                ]
        return []


class FakeCustomerService:
    def __init__(self):
        self.resource_names: List[str] = []
        self.error: Optional[Exception] = None

    def list_accessible_customers(self):
        if self.error is not None:
            raise self.error
        return types.SimpleNamespace(resource_names=list(self.resource_names))


class FakeSdkClient:
    def __init__(self):
        self.ga_service = FakeGoogleAdsService()
        self.customer_service = FakeCustomerService()

    def get_service(self, name):
        if name == "CustomerService":
            return self.customer_service
        return self.ga_service


# ============================================================================
# Google Sheets API fakes
# ============================================================================

class _FakeRequest:
    def __init__(self, result, error=None):
        self._result = result
        self._error = error

    def execute(self):
        if self._error is not None:
            raise self._error
        return self._result


class FakeValuesApi:
    def __init__(self):
        self.calls: List[Tuple[str, dict]] = []
        self.error: Optional[Exception] = None

    def clear(self, **kwargs):
        self.calls.append(("clear", kwargs))
        return _FakeRequest({}, self.error)

    def update(self, **kwargs):
        self.calls.append(("update", kwargs))
        return _FakeRequest({"updatedRows": len(kwargs["body"]["values"])}, self.error)


class FakeSheetsApi:
    def __init__(self):
        self.values_api = FakeValuesApi()

    def spreadsheets(self):
        return types.SimpleNamespace(values=lambda: self.values_api)


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def fake_ads_sdk() -> FakeSdkClient:
    return FakeSdkClient()


@pytest.fixture
def ads_client(fake_ads_sdk):
    from adsreport.services.google_ads_client import GAdsClient

    return GAdsClient(client=fake_ads_sdk)


@pytest.fixture
def fake_sheets_api() -> FakeSheetsApi:
    return FakeSheetsApi()


@pytest.fixture
def sheets_client(fake_sheets_api):
    from adsreport.services.google_sheets_client import GSheetsClient

    return GSheetsClient(service=fake_sheets_api)


@pytest.fixture
def app(ads_client, sheets_client):
    """Create FastAPI test application wired to the fakes."""
    from adsreport.deps import Settings, get_ads_report_service, get_settings, get_sheets_report_service
    from adsreport.main import create_app
    from adsreport.services.ads_report_service import GoogleAdsReportService
    from adsreport.services.sheets_report_service import SheetsReportService

    test_app = create_app()
    test_app.dependency_overrides[get_ads_report_service] = lambda: GoogleAdsReportService(ads_client)
    test_app.dependency_overrides[get_sheets_report_service] = lambda: SheetsReportService(sheets_client)
    test_app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None, CSV_DELIMITER=",")
    return test_app


@pytest.fixture
def client(app) -> TestClient:
    """Create TestClient for HTTP testing."""
    return TestClient(app)
