"""Turn raw API response bodies into response envelopes."""

from __future__ import annotations

import json
from typing import Any, Mapping

from royalmail_tracking.builders import build_error_detail_list, build_mail_piece, coerce_int
from royalmail_tracking.errors import RoyalMailResponseError
from royalmail_tracking.models import Response, SummaryResponse

PAYLOAD_KEY = 'mailPieces'


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def load_body(status_code: int, body: str) -> dict[str, Any]:
    """Parse the body as a JSON object.

    Raises:
        RoyalMailResponseError: The body is not JSON, or not a JSON object.
    """
    try:
        decoded = json.loads(body)
    except ValueError as exc:
        raise RoyalMailResponseError(status_code, body) from exc
    if not isinstance(decoded, dict):
        raise RoyalMailResponseError(status_code, body)
    return decoded


def decode_response(status_code: int, body: str) -> Response:
    """Decode an events or signature response.

    A body without ``mailPieces`` is only acceptable when it carries error
    information for the classifier to act on.
    """
    decoded = load_body(status_code, body)
    error_fields = _error_fields(status_code, decoded)
    mail_pieces = decoded.get(PAYLOAD_KEY)

    if mail_pieces is None:
        if not _signals_error(error_fields):
            raise RoyalMailResponseError(status_code, body)
        return Response(**error_fields)
    if not isinstance(mail_pieces, Mapping):
        raise RoyalMailResponseError(status_code, body)

    return Response(mail_pieces=build_mail_piece(mail_pieces), **error_fields)


def decode_summary_response(status_code: int, body: str) -> SummaryResponse:
    """Decode a summary response.

    Failures for individual tracking numbers stay on their own mail piece; only
    a failure of the whole request populates the envelope's error fields.
    """
    decoded = load_body(status_code, body)
    mail_pieces = decoded.get(PAYLOAD_KEY) or []
    if not isinstance(mail_pieces, list):
        raise RoyalMailResponseError(status_code, body)

    return SummaryResponse(
        mail_pieces=tuple(
            build_mail_piece(mail_piece) for mail_piece in mail_pieces if isinstance(mail_piece, Mapping)
        ),
        **_error_fields(status_code, decoded),
    )


def _error_fields(status_code: int, decoded: Mapping[str, Any]) -> dict[str, Any]:
    http_code = coerce_int(decoded.get('httpCode'))
    if http_code is None and not is_success(status_code):
        http_code = status_code
    return {
        'http_code': http_code,
        'http_message': _optional_text(decoded.get('httpMessage')),
        'more_information': _optional_text(decoded.get('moreInformation')),
        'errors': build_error_detail_list(decoded.get('errors')),
    }


def _signals_error(error_fields: Mapping[str, Any]) -> bool:
    return error_fields['http_code'] is not None or bool(error_fields['errors'])


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)
