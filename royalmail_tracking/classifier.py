"""Decide which error, if any, a decoded response should raise."""

from __future__ import annotations

from dataclasses import dataclass

from royalmail_tracking.decoder import is_success
from royalmail_tracking.errors import ErrorCategory, ErrorKind, RoyalMailApiError
from royalmail_tracking.models import ErrorResponse

GENERIC_ERROR_MESSAGE = 'Royal Mail Error'

ERROR_CODE_KINDS: dict[str, ErrorKind] = {
    kind.error_code: kind for kind in ErrorKind if kind.error_code is not None
}
STATUS_KINDS: dict[int, ErrorKind] = {
    kind.status_code: kind for kind in ErrorKind if kind.status_code is not None
}


@dataclass(frozen=True, slots=True)
class ErrorPolicy:
    """Which classified errors are raised instead of returned.

    ``throw_on_tracking_error`` covers business error codes (unknown barcode,
    no proof of delivery, ...). ``throw_on_technical_error`` covers technical
    error codes and every error derived from the HTTP status alone.
    """

    throw_on_tracking_error: bool = True
    throw_on_technical_error: bool = True


def needs_classification(status_code: int, response: ErrorResponse) -> bool:
    return not is_success(status_code) or response.has_errors


def resolve_kind(status_code: int, response: ErrorResponse) -> ErrorKind | None:
    """Name the error condition a response describes, ignoring any policy.

    Only the first entry of ``errors`` is considered. Without a recognised
    error code the status decides, preferring the ``httpCode`` from the body
    over the transport status.
    """
    if not needs_classification(status_code, response):
        return None
    code = response.errors[0].error_code if response.errors else None
    if code in ERROR_CODE_KINDS:
        return ERROR_CODE_KINDS[code]
    status = response.http_code if response.http_code is not None else status_code
    return STATUS_KINDS.get(status, ErrorKind.UNEXPECTED_RESPONSE)


def classify(
    status_code: int,
    response: ErrorResponse,
    policy: ErrorPolicy,
) -> RoyalMailApiError | None:
    """Return the error to raise for a response, or ``None`` to return it.

    Args:
        status_code: Transport status of the HTTP response.
        response: The decoded envelope.
        policy: Suppression switches configured on the client.
    """
    kind = resolve_kind(status_code, response)
    if kind is None or not _policy_allows(kind, policy):
        return None
    return RoyalMailApiError(kind, _message(kind, response), response)


def _policy_allows(kind: ErrorKind, policy: ErrorPolicy) -> bool:
    if kind.is_business:
        return policy.throw_on_tracking_error
    return policy.throw_on_technical_error


def _message(kind: ErrorKind, response: ErrorResponse) -> str:
    if kind.category is not ErrorCategory.STATUS and _matched_by_code(kind, response):
        description = response.errors[0].error_description
        if description:
            return description
    return response.more_information or response.http_message or GENERIC_ERROR_MESSAGE


def _matched_by_code(kind: ErrorKind, response: ErrorResponse) -> bool:
    return bool(response.errors) and response.errors[0].error_code == kind.error_code
