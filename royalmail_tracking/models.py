"""Domain model for Royal Mail tracking responses.

One set of entities is shared by the events, signature and summary operations;
each operation simply populates a subset of the optional fields. Python
attributes are snake_case, JSON keys use the API's camelCase names.
"""

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class TrackingModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def as_json(self) -> str:
        """Encode with API key names, dropping every field that is unset."""
        return self.model_dump_json(by_alias=True, exclude_none=True)

    def as_dict(self) -> dict[str, Any]:
        return self.model_dump(mode='json', by_alias=True, exclude_none=True)


class InternationalPostalProvider(TrackingModel):
    url: str | None = None
    title: str | None = None
    description: str | None = None


class Summary(TrackingModel):
    unique_item_id: str | None = None
    one_d_barcode: str | None = None
    product_id: str | None = None
    product_name: str | None = None
    product_description: str | None = None
    product_category: str | None = None
    destination_country_code: str | None = None
    destination_country_name: str | None = None
    origin_country_code: str | None = None
    origin_country_name: str | None = None
    last_event_code: str | None = None
    last_event_name: str | None = None
    last_event_date_time: dt.datetime | None = None
    last_event_location_name: str | None = None
    status_description: str | None = None
    status_category: str | None = None
    status_help_text: str | None = None
    summary_line: str | None = None
    international_postal_provider: InternationalPostalProvider | None = None


class Signature(TrackingModel):
    """Proof of delivery captured when the item was handed over.

    The barcodes and the embedded image are only returned by the dedicated
    signature operation; ``image`` holds inline SVG markup or base64 raster
    data depending on ``image_format``.
    """

    recipient_name: str | None = None
    signature_date_time: dt.datetime | None = None
    image_id: str | None = None
    unique_item_id: str | None = None
    one_d_barcode: str | None = None
    image_format: str | None = None
    height: int | None = None
    width: int | None = None
    image: str | None = None


class Event(TrackingModel):
    event_code: str | None = None
    event_name: str | None = None
    event_date_time: dt.datetime | None = None
    location_name: str | None = None


class EstimatedDelivery(TrackingModel):
    date: dt.date
    start_of_estimated_window: dt.datetime | None = None
    end_of_estimated_window: dt.datetime | None = None


class Link(TrackingModel):
    href: str | None = None
    title: str | None = None
    description: str | None = None


class Links(TrackingModel):
    summary: Link | None = None
    signature: Link | None = None
    events: Link | None = None
    redelivery: Link | None = None


class ErrorDetail(TrackingModel):
    error_code: str | None = None
    error_description: str | None = None
    error_cause: str | None = None
    error_resolution: str | None = None


class MailPiece(TrackingModel):
    """A single trackable item.

    ``events`` keeps the order returned by the API. ``error`` is only set on
    summary results, when this item failed while the request as a whole
    succeeded.
    """

    mail_piece_id: str | None = None
    status: str | None = None
    carrier_short_name: str | None = None
    carrier_full_name: str | None = None
    summary: Summary | None = None
    signature: Signature | None = None
    estimated_delivery: EstimatedDelivery | None = None
    events: tuple[Event, ...] | None = None
    links: Links | None = None
    error: ErrorDetail | None = None


class ErrorResponse(TrackingModel):
    """Error fields shared by every response envelope.

    ``http_code`` is only populated when an error was detected; the API may
    report one in the body while the transport status is 200.
    """

    http_code: int | None = None
    http_message: str | None = None
    more_information: str | None = None
    errors: tuple[ErrorDetail, ...] = ()

    @property
    def has_errors(self) -> bool:
        return self.http_code is not None or bool(self.errors)


class Response(ErrorResponse):
    """Envelope returned by the events and signature operations."""

    mail_pieces: MailPiece | None = None


class SummaryResponse(ErrorResponse):
    """Envelope returned by the summary operation."""

    mail_pieces: tuple[MailPiece, ...] = ()
