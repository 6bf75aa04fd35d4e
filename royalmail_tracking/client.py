"""HTTP client for the Royal Mail mailpieces tracking API."""

from __future__ import annotations

import dataclasses
import logging
from typing import Callable, Iterable, TypeVar

import httpx

from royalmail_tracking.classifier import ErrorPolicy, classify
from royalmail_tracking.config import Config
from royalmail_tracking.decoder import decode_response, decode_summary_response
from royalmail_tracking.errors import RoyalMailTransportError
from royalmail_tracking.models import ErrorResponse, Response, SummaryResponse
from royalmail_tracking.sanitizer import sanitise_tracking_id, sanitise_tracking_ids

logger = logging.getLogger(__name__)

ResponseT = TypeVar('ResponseT', bound=ErrorResponse)


class RoyalMailClient:
    """Client for the Royal Mail tracking API (mailpieces v2).

    Every operation sends exactly one GET request and returns a freshly built,
    immutable response envelope. Error statuses are never raised by the
    transport: their bodies are decoded and classified, then raised as
    ``RoyalMailApiError`` or left on the envelope depending on the configured
    ``throw_on_tracking_error`` and ``throw_on_technical_error`` switches.

    Example:
        >>> client = RoyalMailClient(Config.from_env())
        >>>
        >>> response = client.events("AB 01-23456789GB")
        >>> for event in response.mail_pieces.events or ():
        >>>     print(event.event_date_time, event.event_name)
        >>>
        >>> # Latest status for several items at once
        >>> summary = client.summary(["AB0123456789GB", "CD0123456789GB"])
        >>> for mail_piece in summary.mail_pieces:
        >>>     print(mail_piece.mail_piece_id, mail_piece.error or mail_piece.summary)
    """

    def __init__(
        self,
        config: Config,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config
        self._policy = config.policy
        self._transport = transport

    def events(self, tracking_number: str) -> Response:
        """Fetch the tracking history of a single item.

        Args:
            tracking_number: Royal Mail tracking ID (e.g. AB0123456789GB).
                Non-alphanumeric characters are stripped.

        Returns:
            Response whose ``mail_pieces`` holds the summary, signature
            metadata, estimated delivery window, events and links.

        Raises:
            RoyalMailApiError: The API reported an error not suppressed by policy.
            RoyalMailResponseError: The response body could not be decoded.
            RoyalMailTransportError: No response was obtained.
        """
        path = f'{sanitise_tracking_id(tracking_number)}/events'
        return self._call(path, decode_response)

    def signature(self, tracking_number: str) -> Response:
        """Fetch the proof-of-delivery signature of a single item.

        Signatures are only captured for services that require one on
        delivery; otherwise the API answers with a business error.

        Raises:
            RoyalMailApiError: The API reported an error not suppressed by policy.
            RoyalMailResponseError: The response body could not be decoded.
            RoyalMailTransportError: No response was obtained.
        """
        path = f'{sanitise_tracking_id(tracking_number)}/signature'
        return self._call(path, decode_response)

    def summary(self, tracking_numbers: Iterable[str]) -> SummaryResponse:
        """Fetch the latest tracking summary for one or more items.

        IDs are sent in the given order without de-duplication. The API accepts
        at most 30 per request. An error for a single tracking number is
        reported on that item's ``error`` rather than raised, and business
        error codes on the whole request are always returned: only
        ``throw_on_technical_error`` applies here.

        Raises:
            RoyalMailApiError: The whole request failed with a technical error
                and policy raises.
            RoyalMailResponseError: The response body could not be decoded.
            RoyalMailTransportError: No response was obtained.
        """
        ids = ','.join(sanitise_tracking_ids(tracking_numbers))
        policy = dataclasses.replace(self._policy, throw_on_tracking_error=False)
        return self._call(f'summary?mailPieceId={ids}', decode_summary_response, policy)

    def _call(
        self,
        path: str,
        decode: Callable[[int, str], ResponseT],
        policy: ErrorPolicy | None = None,
    ) -> ResponseT:
        status_code, body = self._request(path)
        response = decode(status_code, body)

        error = classify(status_code, response, policy or self._policy)
        if error is not None:
            logger.debug('Royal Mail %s error (%s) for %s', error.kind.name, status_code, path)
            raise error
        if response.has_errors:
            logger.warning(
                'Royal Mail error for %s left on response: httpCode=%s, errors=%s',
                path,
                response.http_code,
                [detail.error_code for detail in response.errors],
            )
        return response

    def _request(self, path: str) -> tuple[int, str]:
        headers = {
            'User-Agent': self._config.user_agent,
            'Accept': 'application/json',
            'X-Accept-RMG-Terms': 'yes',
            'X-IBM-Client-Id': self._config.client_id,
            'X-IBM-Client-Secret': self._config.client_secret,
        }

        logger.debug('GET %s/%s', self._config.base_url, path)
        try:
            with httpx.Client(
                base_url=self._config.base_url,
                headers=headers,
                timeout=self._config.timeout,
                transport=self._transport,
            ) as client:
                response = client.get(path)
        except httpx.HTTPError as exc:
            raise RoyalMailTransportError(exc) from exc

        logger.debug('Royal Mail responded %s for %s', response.status_code, path)
        return response.status_code, response.text
