import pytest

from royalmail_tracking.classifier import ErrorPolicy
from royalmail_tracking.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, Config

ENV_VARS = (
    'ROYALMAIL_BASE_URL',
    'ROYALMAIL_CLIENT_ID',
    'ROYALMAIL_CLIENT_SECRET',
    'ROYALMAIL_USER_AGENT',
    'ROYALMAIL_TIMEOUT',
    'ROYALMAIL_THROW_ON_TRACKING_ERROR',
    'ROYALMAIL_THROW_ON_TECHNICAL_ERROR',
)


@pytest.fixture
def credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('ROYALMAIL_CLIENT_ID', 'env-id')
    monkeypatch.setenv('ROYALMAIL_CLIENT_SECRET', 'env-secret')


def test_from_env_defaults(credentials) -> None:
    config = Config.from_env()

    assert config.base_url == DEFAULT_BASE_URL
    assert config.client_id == 'env-id'
    assert config.client_secret == 'env-secret'
    assert config.timeout == DEFAULT_TIMEOUT_SECONDS
    assert config.user_agent.startswith('royalmail-tracking/')
    assert config.policy == ErrorPolicy()


def test_from_env_reads_overrides(credentials, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('ROYALMAIL_BASE_URL', 'http://localhost:8080/mailpieces/v2/')
    monkeypatch.setenv('ROYALMAIL_USER_AGENT', 'custom-agent')
    monkeypatch.setenv('ROYALMAIL_TIMEOUT', '2.5')
    monkeypatch.setenv('ROYALMAIL_THROW_ON_TRACKING_ERROR', 'false')
    monkeypatch.setenv('ROYALMAIL_THROW_ON_TECHNICAL_ERROR', ' NO ')

    config = Config.from_env()

    assert config.base_url == 'http://localhost:8080/mailpieces/v2'
    assert config.user_agent == 'custom-agent'
    assert config.timeout == 2.5
    assert config.policy == ErrorPolicy(throw_on_tracking_error=False, throw_on_technical_error=False)


@pytest.mark.parametrize(('raw', 'expected'), [('1', True), ('on', True), ('maybe', True), ('0', False)])
def test_from_env_bool_parsing(credentials, monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv('ROYALMAIL_THROW_ON_TRACKING_ERROR', raw)

    assert Config.from_env().throw_on_tracking_error is expected


def test_from_env_ignores_unparsable_timeout(credentials, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('ROYALMAIL_TIMEOUT', 'soon')

    assert Config.from_env().timeout == DEFAULT_TIMEOUT_SECONDS


def test_from_env_requires_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    with pytest.raises(ValueError, match='client_id must not be empty'):
        Config.from_env()

    monkeypatch.setenv('ROYALMAIL_CLIENT_ID', 'env-id')
    with pytest.raises(ValueError, match='client_secret must not be empty'):
        Config.from_env()


@pytest.mark.parametrize(
    ('overrides', 'message'),
    [
        ({'base_url': 'not a url'}, 'Invalid base_url'),
        ({'base_url': 'ftp://api.royalmail.net'}, 'http or https'),
        ({'timeout': 0}, 'timeout must be positive'),
        ({'timeout': -1.0}, 'timeout must be positive'),
    ],
)
def test_validate_rejects_invalid_values(overrides: dict, message: str) -> None:
    config = Config(client_id='id', client_secret='secret', **overrides)

    with pytest.raises(ValueError, match=message):
        config._validate()


def test_validate_returns_self() -> None:
    config = Config(client_id='id', client_secret='secret')

    assert config._validate() is config
