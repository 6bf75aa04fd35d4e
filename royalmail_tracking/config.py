"""Configuration handling for the Royal Mail tracking client."""

from __future__ import annotations

from dataclasses import dataclass
from os import environ
from typing import TypeVar
from urllib.parse import urlparse

from royalmail_tracking import __version__
from royalmail_tracking.classifier import ErrorPolicy

DEFAULT_BASE_URL = 'https://api.royalmail.net/mailpieces/v2'
DEFAULT_TIMEOUT_SECONDS = 20.0

_TRUE_VALUES = frozenset({'1', 'true', 'yes', 'on'})
_FALSE_VALUES = frozenset({'0', 'false', 'no', 'off'})


@dataclass(slots=True)
class Config:
    """Configuration settings for the Royal Mail tracking client.

    Credentials are issued per application on the Royal Mail developer portal
    and sent with every request. The two ``throw_on_*`` switches decide whether
    classified API errors are raised or left on the returned response.

    Environment Variables:
        ROYALMAIL_BASE_URL: Base URL of the mailpieces API
            (default: https://api.royalmail.net/mailpieces/v2)
        ROYALMAIL_CLIENT_ID: Client ID (X-IBM-Client-Id header)
        ROYALMAIL_CLIENT_SECRET: Client secret (X-IBM-Client-Secret header)
        ROYALMAIL_USER_AGENT: Custom User-Agent header
        ROYALMAIL_TIMEOUT: Request timeout in seconds (default: 20.0)
        ROYALMAIL_THROW_ON_TRACKING_ERROR: Raise business errors (default: true)
        ROYALMAIL_THROW_ON_TECHNICAL_ERROR: Raise technical errors (default: true)

    Example:
        >>> config = Config.from_env()
        >>>
        >>> # Or configure directly
        >>> config = Config(
        >>>     client_id="my-client-id",
        >>>     client_secret="my-client-secret",
        >>>     throw_on_tracking_error=False,
        >>> )
    """

    base_url: str = DEFAULT_BASE_URL
    client_id: str = ''
    client_secret: str = ''
    user_agent: str = f'royalmail-tracking/{__version__}'
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    throw_on_tracking_error: bool = True
    throw_on_technical_error: bool = True

    @property
    def policy(self) -> ErrorPolicy:
        return ErrorPolicy(
            throw_on_tracking_error=self.throw_on_tracking_error,
            throw_on_technical_error=self.throw_on_technical_error,
        )

    @classmethod
    def from_env(cls) -> Config:
        """Create a configuration instance from environment variables.

        Returns:
            Validated Config instance with values from environment or defaults.

        Raises:
            ValueError: If any configuration value is invalid.
        """

        base_url = environ.get('ROYALMAIL_BASE_URL', DEFAULT_BASE_URL).rstrip('/')
        user_agent = environ.get('ROYALMAIL_USER_AGENT') or f'royalmail-tracking/{__version__}'

        return cls(
            base_url=base_url,
            client_id=environ.get('ROYALMAIL_CLIENT_ID', ''),
            client_secret=environ.get('ROYALMAIL_CLIENT_SECRET', ''),
            user_agent=user_agent,
            timeout=_read_number('ROYALMAIL_TIMEOUT', float, DEFAULT_TIMEOUT_SECONDS),
            throw_on_tracking_error=_read_bool('ROYALMAIL_THROW_ON_TRACKING_ERROR', True),
            throw_on_technical_error=_read_bool('ROYALMAIL_THROW_ON_TECHNICAL_ERROR', True),
        )._validate()

    def _validate(self) -> Config:
        """Validate all configuration values for correctness.

        Returns:
            Self for method chaining.

        Raises:
            ValueError: If any configuration value is invalid with descriptive message.
        """
        parsed = urlparse(self.base_url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f'Invalid base_url: {self.base_url}')
        if parsed.scheme not in ('http', 'https'):
            raise ValueError(f'base_url must use http or https scheme: {self.base_url}')

        if self.timeout <= 0:
            raise ValueError(f'timeout must be positive: {self.timeout}')

        if not self.client_id:
            raise ValueError('client_id must not be empty')
        if not self.client_secret:
            raise ValueError('client_secret must not be empty')

        return self


T = TypeVar('T', bound=float | int)


def _read_number(
    name: str,
    cast: type[T],
    default: T,
) -> T:
    raw = environ.get(name)
    if not raw:
        return default
    try:
        value = cast(raw)
    except (TypeError, ValueError):
        return default
    return value


def _read_bool(name: str, default: bool) -> bool:
    raw = environ.get(name)
    if not raw:
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default
