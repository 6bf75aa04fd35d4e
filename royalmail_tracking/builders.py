"""Pure mapping functions from decoded JSON objects to domain entities.

Each builder takes the JSON object for one nested shape and returns the
matching entity. Optional keys that are absent (or empty) leave the field
unset rather than producing an empty entity, and a timestamp that cannot be
parsed only blanks that one field.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Callable, Mapping, TypeVar

from royalmail_tracking.models import (
    ErrorDetail,
    EstimatedDelivery,
    Event,
    InternationalPostalProvider,
    Link,
    Links,
    MailPiece,
    Signature,
    Summary,
)

LINK_NAMES = ('summary', 'signature', 'events', 'redelivery')

T = TypeVar('T')


def build_mail_piece(mail_piece: Mapping[str, Any]) -> MailPiece:
    events = mail_piece.get('events')
    error = mail_piece.get('error')
    return MailPiece(
        mail_piece_id=_text(mail_piece.get('mailPieceId')),
        status=_text(mail_piece.get('status')),
        carrier_short_name=_text(mail_piece.get('carrierShortName')),
        carrier_full_name=_text(mail_piece.get('carrierFullName')),
        summary=_optional(build_summary, mail_piece.get('summary')),
        signature=_optional(build_signature, mail_piece.get('signature')),
        estimated_delivery=_optional(build_estimated_delivery, mail_piece.get('estimatedDelivery')),
        events=tuple(build_event(event) for event in events if isinstance(event, Mapping))
        if events and isinstance(events, list)
        else None,
        links=_optional(build_links, mail_piece.get('links')),
        error=build_error_detail(error) if error and isinstance(error, Mapping) else None,
    )


def build_summary(summary: Mapping[str, Any]) -> Summary:
    return Summary(
        unique_item_id=_text(summary.get('uniqueItemId')),
        one_d_barcode=_text(summary.get('oneDBarcode')),
        product_id=_text(summary.get('productId')),
        product_name=_text(summary.get('productName')),
        product_description=_text(summary.get('productDescription')),
        product_category=_text(summary.get('productCategory')),
        destination_country_code=_text(summary.get('destinationCountryCode')),
        destination_country_name=_text(summary.get('destinationCountryName')),
        origin_country_code=_text(summary.get('originCountryCode')),
        origin_country_name=_text(summary.get('originCountryName')),
        last_event_code=_text(summary.get('lastEventCode')),
        last_event_name=_text(summary.get('lastEventName')),
        last_event_date_time=parse_datetime(summary.get('lastEventDateTime')),
        last_event_location_name=_text(summary.get('lastEventLocationName')),
        status_description=_text(summary.get('statusDescription')),
        status_category=_text(summary.get('statusCategory')),
        status_help_text=_text(summary.get('statusHelpText')),
        summary_line=_text(summary.get('summaryLine')),
        international_postal_provider=_optional(
            build_international_postal_provider, summary.get('internationalPostalProvider')
        ),
    )


def build_international_postal_provider(provider: Mapping[str, Any]) -> InternationalPostalProvider:
    return InternationalPostalProvider(
        url=_text(provider.get('url')),
        title=_text(provider.get('title')),
        description=_text(provider.get('description')),
    )


def build_signature(signature: Mapping[str, Any]) -> Signature:
    return Signature(
        recipient_name=_text(signature.get('recipientName')),
        signature_date_time=parse_datetime(signature.get('signatureDateTime')),
        image_id=_text(signature.get('imageId')),
        unique_item_id=_text(signature.get('uniqueItemId')),
        one_d_barcode=_text(signature.get('oneDBarcode')),
        image_format=_text(signature.get('imageFormat')),
        height=coerce_int(signature.get('height')),
        width=coerce_int(signature.get('width')),
        image=_text(signature.get('image')),
    )


def build_event(event: Mapping[str, Any]) -> Event:
    return Event(
        event_code=_text(event.get('eventCode')),
        event_name=_text(event.get('eventName')),
        event_date_time=parse_datetime(event.get('eventDateTime')),
        location_name=_text(event.get('locationName')),
    )


def build_estimated_delivery(estimated_delivery: Mapping[str, Any]) -> EstimatedDelivery | None:
    """Build the delivery window, or ``None`` when its date is unusable.

    The API sends the date and the two times of day separately; the window
    boundaries only make sense anchored to a valid date.
    """
    delivery_date = parse_date(estimated_delivery.get('date'))
    if delivery_date is None:
        return None
    return EstimatedDelivery(
        date=delivery_date,
        start_of_estimated_window=_window_boundary(
            delivery_date, estimated_delivery.get('startOfEstimatedWindow')
        ),
        end_of_estimated_window=_window_boundary(
            delivery_date, estimated_delivery.get('endOfEstimatedWindow')
        ),
    )


def build_links(links: Mapping[str, Any]) -> Links:
    return Links(**{name: _optional(build_link, links.get(name)) for name in LINK_NAMES})


def build_link(link: Mapping[str, Any]) -> Link:
    return Link(
        href=_text(link.get('href')),
        title=_text(link.get('title')),
        description=_text(link.get('description')),
    )


def build_error_detail(error: Mapping[str, Any]) -> ErrorDetail:
    return ErrorDetail(
        error_code=_trimmed(error.get('errorCode')),
        error_description=_trimmed(error.get('errorDescription')),
        error_cause=_trimmed(error.get('errorCause')),
        error_resolution=_trimmed(error.get('errorResolution')),
    )


def build_error_detail_list(errors: Any) -> tuple[ErrorDetail, ...]:
    if not isinstance(errors, list):
        return ()
    return tuple(build_error_detail(error) for error in errors if isinstance(error, Mapping))


def parse_datetime(value: Any) -> dt.datetime | None:
    if not isinstance(value, str):
        return None
    try:
        parsed = dt.datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    return _with_offset(parsed)


def parse_date(value: Any) -> dt.date | None:
    if not isinstance(value, str):
        return None
    try:
        return dt.datetime.strptime(value.strip(), '%Y-%m-%d').date()
    except ValueError:
        return None


def parse_time(value: Any) -> dt.time | None:
    if not isinstance(value, str):
        return None
    try:
        return dt.time.fromisoformat(value.strip())
    except ValueError:
        return None


def coerce_int(value: Any) -> int | None:
    """Accept integers sent either as JSON numbers or as numeric strings."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _window_boundary(delivery_date: dt.date, value: Any) -> dt.datetime | None:
    time_of_day = parse_time(value)
    if time_of_day is None:
        return None
    return _with_offset(dt.datetime.combine(delivery_date, time_of_day))


def _with_offset(value: dt.datetime) -> dt.datetime:
    # Timestamps without an offset are reported in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value


def _optional(builder: Callable[[Mapping[str, Any]], T | None], value: Any) -> T | None:
    if not value or not isinstance(value, Mapping):
        return None
    return builder(value)


def _text(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _trimmed(value: Any) -> str | None:
    text = _text(value)
    return text.strip() if text is not None else None
