import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from payloads import EVENTS_PAYLOAD, SIGNATURE_PAYLOAD, SUMMARY_PAYLOAD, error_payload
from royalmail_tracking.server import create_server

pytestmark = pytest.mark.asyncio


async def test_server_lists_tracking_tools(royalmail_server) -> None:
    async with Client(royalmail_server) as client:
        tools = await client.list_tools()

    assert sorted(tool.name for tool in tools) == [
        'royalmail_events',
        'royalmail_signature',
        'royalmail_summary',
    ]
    assert all(tool.annotations.readOnlyHint for tool in tools)


async def test_events_tool_returns_camel_case_payload(royalmail_server, mock_api) -> None:
    api, _ = mock_api
    api.add_json('/AB0123456789GB/events', EVENTS_PAYLOAD)

    async with Client(royalmail_server) as client:
        result = await client.call_tool(
            'royalmail_events',
            {'tracking_number': 'AB 01-23456789GB'},
        )

    mail_piece = result.data['mailPieces']
    assert mail_piece['mailPieceId'] == '090367574000000FE1E1B'
    assert mail_piece['summary']['lastEventCode'] == 'EVNMI'
    assert mail_piece['estimatedDelivery']['date'] == '2017-02-20'
    assert 'httpCode' not in result.data
    assert len(api.calls) == 1


async def test_signature_tool_targets_signature_endpoint(mock_api, config) -> None:
    api, transport = mock_api
    api.add_json('/123456789GB/signature', SIGNATURE_PAYLOAD)

    server = create_server(config=config, transport=transport)

    async with Client(server) as client:
        result = await client.call_tool(
            'royalmail_signature',
            {'tracking_number': '123456789GB'},
        )

    assert result.data['mailPieces']['signature']['recipientName'] == 'Elliot'
    assert api.calls[0].url.path == '/mailpieces/v2/123456789GB/signature'


async def test_summary_tool_keeps_item_errors(royalmail_server, mock_api) -> None:
    api, _ = mock_api
    api.add_json('/summary', SUMMARY_PAYLOAD)

    async with Client(royalmail_server) as client:
        result = await client.call_tool(
            'royalmail_summary',
            {'tracking_numbers': ['090367574000000FE1E1B', 'JH987654321GB']},
        )

    assert [item['mailPieceId'] for item in result.data['mailPieces']] == [
        '090367574000000FE1E1B',
        'JH987654321GB',
    ]
    assert result.data['mailPieces'][1]['error']['errorCode'] == 'E1142'
    assert api.calls[0].url.params['mailPieceId'] == '090367574000000FE1E1B,JH987654321GB'


async def test_api_error_is_reported_as_tool_error(royalmail_server, mock_api) -> None:
    api, _ = mock_api
    api.add_json('/123456789GB/events', error_payload(404, error_code='E1142'), status_code=404)

    async with Client(royalmail_server) as client:
        with pytest.raises(ToolError, match='Error description'):
            await client.call_tool('royalmail_events', {'tracking_number': '123456789GB'})


async def test_lenient_server_returns_error_envelope(mock_api, config) -> None:
    api, transport = mock_api
    api.add_json('/123456789GB/events', error_payload(404, error_code='E1142'), status_code=404)
    config.throw_on_tracking_error = False

    server = create_server(config=config, transport=transport)

    async with Client(server) as client:
        result = await client.call_tool('royalmail_events', {'tracking_number': '123456789GB'})

    assert result.data['httpCode'] == 404
    assert result.data['errors'][0]['errorCode'] == 'E1142'
    assert 'mailPieces' not in result.data
