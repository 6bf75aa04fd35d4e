"""Tracking number clean-up applied before an ID reaches a URL."""

from __future__ import annotations

from typing import Iterable


def sanitise_tracking_id(tracking_id: str) -> str:
    """Strip everything that is not a letter or digit, keeping the order.

    >>> sanitise_tracking_id('AB 01-23456789GB')
    'AB0123456789GB'
    """
    return ''.join(character for character in tracking_id if character.isalnum())


def sanitise_tracking_ids(tracking_ids: Iterable[str]) -> list[str]:
    return [sanitise_tracking_id(tracking_id) for tracking_id in tracking_ids]
