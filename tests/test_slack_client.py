"""Tests for the Slack Web API client over a mock HTTP transport."""
import json

import httpx
import pytest

from slack_mcp.config import Settings
from slack_mcp.errors import ConfigurationError, ToolError
from slack_mcp.slack_client import SlackClient


def make_client(handler) -> SlackClient:
    return SlackClient("xoxb-test", base_url="https://slack.test/api", transport=httpx.MockTransport(handler))


class TestApiCall:
    """Request encoding and response decoding."""

    @pytest.mark.asyncio
    async def test_get_sends_auth_and_query(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True, "channels": []})

        async with make_client(handler) as client:
            result = await client.conversations_list(types="public_channel", exclude_archived=True, limit=10)

        assert result == {"ok": True, "channels": []}
        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/api/conversations.list"
        assert request.headers["Authorization"] == "Bearer xoxb-test"
        assert request.url.params["types"] == "public_channel"
        assert request.url.params["exclude_archived"] == "true"
        assert request.url.params["limit"] == "10"
        assert "cursor" not in request.url.params

    @pytest.mark.asyncio
    async def test_post_message_sends_json_body(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True, "channel": "C123", "ts": "1.0"})

        async with make_client(handler) as client:
            await client.chat_post_message(channel="C123", text="hi")

        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == "/api/chat.postMessage"
        assert json.loads(request.content) == {
            "channel": "C123",
            "text": "hi",
            "unfurl_links": True,
            "unfurl_media": True,
        }

    @pytest.mark.asyncio
    async def test_ok_false_returned_not_raised(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"ok": False, "error": "channel_not_found"})

        async with make_client(handler) as client:
            result = await client.conversations_history(channel="C404")

        assert result == {"ok": False, "error": "channel_not_found"}

    @pytest.mark.asyncio
    async def test_http_error_status_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, headers={"Retry-After": "30"})

        async with make_client(handler) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.users_list()

    @pytest.mark.asyncio
    async def test_malformed_json_raises_tool_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>gateway</html>")

        async with make_client(handler) as client:
            with pytest.raises(ToolError, match="Malformed response from users.info"):
                await client.users_info(user="U1")

    @pytest.mark.asyncio
    async def test_non_object_json_raises_tool_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=["not", "an", "object"])

        async with make_client(handler) as client:
            with pytest.raises(ToolError, match="expected an object"):
                await client.search_messages(query="x")


class TestFromSettings:
    """Construction from settings validates the token."""

    def test_rejects_bad_token(self):
        with pytest.raises(ConfigurationError):
            SlackClient.from_settings(Settings(_env_file=None, slack_bot_token="xoxp-nope"))

    @pytest.mark.asyncio
    async def test_builds_from_valid_settings(self):
        client = SlackClient.from_settings(Settings(_env_file=None, slack_bot_token="xoxb-ok"))
        await client.aclose()
