"""Google Ads client service abstraction.

WHAT:
    Encapsulates Google Ads API usage behind a small, testable service layer.
    Builds the SDK client from settings, runs GAQL through search_stream and
    lists the customers reachable with the configured credentials.

WHY:
    - Separation of concerns: keep provider SDK logic out of routers.
    - Single responsibility: this module only talks to Google Ads.
    - Testability: the SDK client is injected, so tests pass a fake.

REFERENCES:
    adsreport/services/ads_report_service.py (GAQL queries + row mapping)
    adsreport/deps.py (Settings, client provider)
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Any, Iterator, List, Optional

from google.ads.googleads.client import GoogleAdsClient as _SdkClient
from google.ads.googleads.errors import GoogleAdsException

from adsreport.errors import AdsApiError

if TYPE_CHECKING:
    from adsreport.deps import Settings

logger = logging.getLogger(__name__)


def normalize_customer_id(customer_id: Optional[str]) -> str:
    """Strip dashes and spaces; the API accepts digits only."""
    return "".join(ch for ch in str(customer_id or "") if ch.isdigit())


def _to_ads_error(exc: GoogleAdsException, context: str) -> AdsApiError:
    messages = []
    failure = getattr(exc, "failure", None)
    for error in getattr(failure, "errors", None) or []:
        message = getattr(error, "message", None)
        if message:
            messages.append(message)
    detail = "; ".join(messages) or str(exc)
    return AdsApiError(
        f"Google Ads request failed while {context}: {detail}",
        request_id=getattr(exc, "request_id", None),
    )


def _wrap_ads_errors(context: str):
    """Translate GoogleAdsException into AdsApiError for regular methods."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                return func(self, *args, **kwargs)
            except GoogleAdsException as exc:
                logger.exception("[GOOGLE_ADS] %s failed (request_id=%s)", context, getattr(exc, "request_id", None))
                raise _to_ads_error(exc, context) from exc

        return wrapper

    return decorator


class GAdsClient:
    """Testable wrapper around Google Ads Python SDK.

    WHAT:
        - Builds an SDK client from settings (yaml file or explicit tokens).
        - Provides GAQL streaming search and accessible customer listing.
    WHY:
        - Keep use cases free from SDK-specific details.
    """

    def __init__(self, client: Any) -> None:
        self._client = client
        self._ga_service = None

    # --- Client factory -------------------------------------------------
    @classmethod
    def from_settings(cls, settings: "Settings") -> "GAdsClient":
        """Build the SDK client from Settings.

        GOOGLE_ADS_CONFIG_FILE (google-ads.yaml) is used when set; otherwise
        GOOGLE_DEVELOPER_TOKEN, GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET and
        GOOGLE_REFRESH_TOKEN are required, GOOGLE_LOGIN_CUSTOMER_ID optional.
        """
        if settings.GOOGLE_ADS_CONFIG_FILE:
            logger.info("[GOOGLE_ADS] Loading client from %s", settings.GOOGLE_ADS_CONFIG_FILE)
            return cls(_SdkClient.load_from_storage(settings.GOOGLE_ADS_CONFIG_FILE))

        config = {
            "developer_token": settings.GOOGLE_DEVELOPER_TOKEN,
            "client_id": settings.GOOGLE_CLIENT_ID,
            "client_secret": settings.GOOGLE_CLIENT_SECRET,
            "refresh_token": settings.GOOGLE_REFRESH_TOKEN,
            # google-ads >= 21 requires explicit use_proto_plus
            "use_proto_plus": True,
        }
        missing = [k for k, v in config.items() if v is None or v == ""]
        if missing:
            raise ValueError(f"Missing required Google Ads settings: {', '.join(missing)}")

        # Only a valid 10-digit id is passed on; anything else makes the SDK fail
        login_cid = normalize_customer_id(settings.GOOGLE_LOGIN_CUSTOMER_ID)
        if len(login_cid) == 10:
            config["login_customer_id"] = login_cid
        elif login_cid:
            logger.warning("[GOOGLE_ADS] Ignoring malformed GOOGLE_LOGIN_CUSTOMER_ID")
        return cls(_SdkClient.load_from_dict(config))

    # --- Low-level GAQL -------------------------------------------------
    def _service(self):
        if self._ga_service is None:
            self._ga_service = self._client.get_service("GoogleAdsService")
        return self._ga_service

    def search_stream(self, customer_id: str, query: str) -> Iterator[Any]:
        """Streaming GAQL results, flattened across batches."""
        cid = normalize_customer_id(customer_id)
        logger.debug("[GOOGLE_ADS] search_stream customer=%s query=%s", cid, " ".join(query.split()))
        try:
            stream = self._service().search_stream(customer_id=cid, query=query)
            for batch in stream:
                yield from getattr(batch, "results", [])
        except GoogleAdsException as exc:
            logger.exception("[GOOGLE_ADS] search_stream failed for customer=%s", cid)
            raise _to_ads_error(exc, f"querying customer {cid}") from exc

    def search(self, customer_id: str, query: str) -> List[Any]:
        """Run a GAQL query and return every row."""
        return list(self.search_stream(customer_id, query))

    # --- Customers ------------------------------------------------------
    @_wrap_ads_errors("listing accessible customers")
    def list_accessible_customers(self) -> List[str]:
        """Return customer ids reachable with the current credentials."""
        service = self._client.get_service("CustomerService")
        response = service.list_accessible_customers()
        # Resource names look like customers/1234567890
        return [str(name).split("/")[-1] for name in getattr(response, "resource_names", [])]
