"""
Report Exceptions
=================

Custom exception types raised by the report services.

WHY THIS FILE EXISTS
--------------------
Report generation has a few distinct failure modes:
- No metrics returned for the requested account/period
- A value that cannot be written to a CSV cell
- Google Ads or Google Sheets rejecting a call

Routers catch these and translate them into HTTP errors.

RELATED FILES
-------------
- adsreport/services/csv_export.py: Raises EmptyInputError, SerializationError
- adsreport/services/google_ads_client.py: Raises AdsApiError
- adsreport/services/google_sheets_client.py: Raises SheetsApiError
- adsreport/routers/reports.py: Catches and maps to HTTPException
"""

from typing import Optional


class ReportError(Exception):
    """
    Base exception for all report errors.

    WHAT:
        Parent class for every error raised by the report services.

    WHY:
        Lets routers catch any report failure with a single except clause
        while still handling specific error types first.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_user_message(self) -> str:
        """Return a message suitable for an HTTP error body."""
        return self.message


class EmptyInputError(ReportError):
    """
    No records were supplied to the CSV writer.

    WHAT:
        Raised when a conversion is asked to derive a header from zero records.

    RECOVERY:
        Call with ``allow_empty=True`` to get a header-less empty document.
    """

    def __init__(self, message: str = "No records to convert"):
        super().__init__(message)


class SerializationError(ReportError):
    """
    A record value has a type that cannot be rendered as a single cell.

    ATTRIBUTES:
        field: Column name of the offending value (if known)
        value_type: Python type name of the offending value
    """

    def __init__(self, message: str, field: Optional[str] = None, value_type: Optional[str] = None):
        super().__init__(message)
        self.field = field
        self.value_type = value_type


class AdsApiError(ReportError):
    """
    Google Ads API call failed.

    ATTRIBUTES:
        request_id: Google Ads request id, useful when contacting support
    """

    def __init__(self, message: str, request_id: Optional[str] = None):
        super().__init__(message)
        self.request_id = request_id

    def to_user_message(self) -> str:
        if self.request_id:
            return f"{self.message} (request_id={self.request_id})"
        return self.message


class SheetsApiError(ReportError):
    """Google Sheets API call failed."""

    def __init__(self, message: str = "Unable to send data to sheets.", status: Optional[int] = None):
        super().__init__(message)
        self.status = status
