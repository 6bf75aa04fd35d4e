"""Royal Mail tracking API client."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover - fallback only triggers when metadata missing
    __version__: str = version('royalmail-tracking')
except PackageNotFoundError:  # pragma: no cover
    __version__ = '0.1.0'

from .client import RoyalMailClient  # noqa: E402
from .config import Config  # noqa: E402
from .errors import (  # noqa: E402
    ErrorKind,
    RoyalMailApiError,
    RoyalMailError,
    RoyalMailResponseError,
    RoyalMailTransportError,
)
from .server import create_server  # noqa: E402

__all__ = [
    'Config',
    'ErrorKind',
    'RoyalMailApiError',
    'RoyalMailClient',
    'RoyalMailError',
    'RoyalMailResponseError',
    'RoyalMailTransportError',
    'create_server',
    '__version__',
]
