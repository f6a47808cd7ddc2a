"""Pytest configuration and fixtures for battery_webhook tests."""

from typing import Any, Dict, List, Optional, Tuple

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from battery_webhook.discord import DiscordEmbed, DiscordPayload


class StubWebhook:
    """Local webhook endpoint that records requests and replays a canned response."""

    def __init__(self) -> None:
        self.server: Optional[TestServer] = None
        self.requests: List[Dict[str, Any]] = []
        self.response: Tuple[int, bytes] = (204, b"")

    @property
    def url(self) -> str:
        return str(self.server.make_url("/hook"))

    def respond(self, status: int, body: bytes = b"") -> None:
        self.response = (status, body)

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append(
            {
                "method": request.method,
                "headers": request.headers.copy(),
                "body": await request.read(),
            }
        )
        status, body = self.response
        if status == 204:
            return web.Response(status=204)
        return web.Response(status=status, body=body)


@pytest_asyncio.fixture
async def stub_webhook():
    """Fixture to provide a running local webhook endpoint."""
    stub = StubWebhook()
    app = web.Application()
    app.router.add_post("/hook", stub.handle)
    server = TestServer(app)
    await server.start_server()
    stub.server = server

    yield stub

    await server.close()


@pytest.fixture
def discord_payload():
    """Fixture to provide a typical Discord payload."""
    embed = (
        DiscordEmbed(title="Battery", description="Charging", color=3066993)
        .add_field("Level", "42%", inline=True)
        .set_footer("MacBook Pro")
    )
    return DiscordPayload(content="Power update", embeds=[embed])
