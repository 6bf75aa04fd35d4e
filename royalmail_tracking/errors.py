"""Custom exception hierarchy for Royal Mail tracking client errors."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from royalmail_tracking.models import ErrorResponse


class ErrorCategory(str, Enum):
    BUSINESS = 'business'
    TECHNICAL = 'technical'
    STATUS = 'status'


class ErrorKind(Enum):
    """Every error condition the API can signal.

    Business and technical kinds are keyed by the API error code, status kinds
    by the HTTP status they stand for. ``TOO_MANY_REQUESTS``,
    ``INTERNAL_SERVER_ERROR`` and ``SERVICE_UNAVAILABLE`` are reachable both
    ways, so they carry a code and a status.
    """

    INVALID_BARCODE_REFERENCE = ('E1142', None, ErrorCategory.BUSINESS)
    PROOF_OF_DELIVERY_UNAVAILABLE = ('E1144', None, ErrorCategory.BUSINESS)
    PROOF_OF_DELIVERY_UNAVAILABLE_FOR_PRODUCT = ('E1145', None, ErrorCategory.BUSINESS)
    TRACKING_NOT_SUPPORTED = ('E1283', None, ErrorCategory.BUSINESS)
    DELIVERY_UPDATE_NOT_AVAILABLE = ('E1284', None, ErrorCategory.BUSINESS)
    UPDATE_NOT_AVAILABLE = ('E1308', None, ErrorCategory.BUSINESS)
    TRACKING_UNAVAILABLE = ('E1307', None, ErrorCategory.BUSINESS)

    MAXIMUM_PARAMETERS_EXCEEDED = ('E0013', None, ErrorCategory.TECHNICAL)
    SCHEMA_VALIDATION_FAILED = ('E0004', None, ErrorCategory.TECHNICAL)
    TOO_MANY_REQUESTS = ('E0010', 429, ErrorCategory.TECHNICAL)
    INTERNAL_SERVER_ERROR = ('E0009', 500, ErrorCategory.TECHNICAL)
    SERVICE_UNAVAILABLE = ('E0001', 503, ErrorCategory.TECHNICAL)

    BAD_REQUEST = (None, 400, ErrorCategory.STATUS)
    CLIENT_ID_NOT_REGISTERED = (None, 401, ErrorCategory.STATUS)
    URI_NOT_FOUND = (None, 404, ErrorCategory.STATUS)
    METHOD_NOT_ALLOWED = (None, 405, ErrorCategory.STATUS)
    UNEXPECTED_RESPONSE = (None, None, ErrorCategory.STATUS)

    def __init__(self, error_code: str | None, status_code: int | None, category: ErrorCategory):
        self.error_code = error_code
        self.status_code = status_code
        self.category = category

    @property
    def is_business(self) -> bool:
        return self.category is ErrorCategory.BUSINESS


class RoyalMailError(Exception):
    """Base exception for Royal Mail tracking client failures."""


class RoyalMailResponseError(RoyalMailError):
    """Raised when the API response cannot be interpreted at all.

    Never suppressed by the client's error policy: without a decodable body
    there is nothing for the caller to inspect.
    """

    def __init__(self, status_code: int | None, body: str) -> None:
        self.status_code = status_code
        self.body = body
        if status_code is None:
            super().__init__(body)
        else:
            super().__init__(f'({status_code}) {body}')


class RoyalMailTransportError(RoyalMailResponseError):
    """Raised when network or protocol-level failures prevent any response."""

    def __init__(self, original: Exception) -> None:
        self.original = original
        super().__init__(None, str(original))


class RoyalMailApiError(RoyalMailError):
    """Raised when the API reports a business or technical error.

    ``kind`` identifies the condition and ``response`` is the decoded envelope,
    so nothing the API returned is lost when the error is caught.
    """

    def __init__(self, kind: ErrorKind, message: str, response: ErrorResponse) -> None:
        self.kind = kind
        self.message = message
        self.response = response
        super().__init__(message)

    @property
    def http_code(self) -> int | None:
        return self.response.http_code
