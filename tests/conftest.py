from dataclasses import dataclass, field
from typing import Any, Callable

import httpx
import pytest

from royalmail_tracking.client import RoyalMailClient
from royalmail_tracking.config import Config
from royalmail_tracking.server import create_server

Responder = Callable[[httpx.Request], httpx.Response]

BASE_PATH = '/mailpieces/v2'


@dataclass
class MockAPI:
    responses: dict[str, Responder] = field(default_factory=dict)
    calls: list[httpx.Request] = field(default_factory=list)

    def add_json(self, path: str, payload: dict[str, Any], status_code: int = 200) -> None:
        def responder(_: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code=status_code, json=payload)

        self.responses[BASE_PATH + path] = responder

    def add_text(self, path: str, body: str, status_code: int = 200) -> None:
        def responder(_: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code=status_code, text=body)

        self.responses[BASE_PATH + path] = responder

    def add_responder(self, path: str, responder: Responder) -> None:
        self.responses[BASE_PATH + path] = responder

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        responder = self.responses.get(request.url.path)
        if responder is None:
            raise AssertionError(f'Unexpected request to {request.url.path}')
        return responder(request)


@pytest.fixture
def config() -> Config:
    return Config(
        base_url='https://api.example.test/mailpieces/v2',
        client_id='client-id',
        client_secret='client-secret',
        user_agent='pytest-agent',
        timeout=5.0,
    )


@pytest.fixture
def mock_api() -> tuple[MockAPI, httpx.MockTransport]:
    api = MockAPI()
    transport = httpx.MockTransport(api.handler)
    return api, transport


@pytest.fixture
def royalmail_client(config: Config, mock_api: tuple[MockAPI, httpx.MockTransport]) -> RoyalMailClient:
    _, transport = mock_api
    return RoyalMailClient(config, transport=transport)


@pytest.fixture
def lenient_client(config: Config, mock_api: tuple[MockAPI, httpx.MockTransport]) -> RoyalMailClient:
    _, transport = mock_api
    config.throw_on_tracking_error = False
    config.throw_on_technical_error = False
    return RoyalMailClient(config, transport=transport)


@pytest.fixture
def royalmail_server(config: Config, mock_api: tuple[MockAPI, httpx.MockTransport]):
    _, transport = mock_api
    server = create_server(config=config, transport=transport)
    return server
