"""FastMCP server exposing the Royal Mail tracking operations as tools."""

from __future__ import annotations

import asyncio
from typing import Annotated, Any, Awaitable, Callable

import httpx
from fastmcp import FastMCP
from pydantic import Field

from royalmail_tracking.client import RoyalMailClient
from royalmail_tracking.config import Config

TrackingNumberParam = Annotated[
    str,
    Field(description='Royal Mail tracking number, e.g. "AB0123456789GB". Spaces and punctuation are ignored.'),
]
TrackingNumbersParam = Annotated[
    list[str],
    Field(
        description='Up to 30 Royal Mail tracking numbers, returned in the same order.',
        min_length=1,
    ),
]


def create_server(
    config: Config | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> FastMCP:
    """Create and configure the FastMCP server for Royal Mail tracking.

    Args:
        config: Configuration instance. If None, will be created from environment.
        transport: Custom HTTP transport for testing. Uses default if None.

    Returns:
        Configured FastMCP server instance ready to serve MCP clients.

    Example:
        >>> server = create_server()
        >>> server.run()
    """

    config = config or Config.from_env()
    client = RoyalMailClient(config, transport=transport)

    mcp = FastMCP(name='royalmail')

    def register_tool(
        *,
        name: str,
        description: str,
    ) -> Callable[
        [Callable[..., Awaitable[dict[str, Any]]]], Callable[..., Awaitable[dict[str, Any]]]
    ]:
        def decorator(
            func: Callable[..., Awaitable[dict[str, Any]]],
        ) -> Callable[..., Awaitable[dict[str, Any]]]:
            return mcp.tool(
                name=name,
                description=description,
                annotations={'readOnlyHint': True, 'idempotentHint': True},
            )(func)

        return decorator

    @register_tool(
        name='royalmail_events',
        description=(
            'Get the tracking history of a Royal Mail item: summary, events in '
            'chronological order, estimated delivery window and signature metadata.'
        ),
    )
    async def royalmail_events(tracking_number: TrackingNumberParam) -> dict[str, Any]:
        response = await asyncio.to_thread(client.events, tracking_number)
        return response.as_dict()

    @register_tool(
        name='royalmail_signature',
        description=(
            'Get the proof-of-delivery signature of a Royal Mail item, including '
            'recipient name, capture time and the signature image.'
        ),
    )
    async def royalmail_signature(tracking_number: TrackingNumberParam) -> dict[str, Any]:
        response = await asyncio.to_thread(client.signature, tracking_number)
        return response.as_dict()

    @register_tool(
        name='royalmail_summary',
        description=(
            'Get the latest tracking status for several Royal Mail items at once. '
            'Items that cannot be tracked carry their own error.'
        ),
    )
    async def royalmail_summary(tracking_numbers: TrackingNumbersParam) -> dict[str, Any]:
        response = await asyncio.to_thread(client.summary, tracking_numbers)
        return response.as_dict()

    return mcp
