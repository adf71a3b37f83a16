"""Async Slack Web API client.

One instance is created per server process and passed explicitly to the
resolver and to every tool handler. Methods return the decoded JSON payload
as-is, including Slack's ``ok``/``error`` fields; checking ``ok`` is the
caller's job. Network failures and HTTP error statuses propagate as httpx
exceptions.
"""
import logging
from typing import Any, Optional

import httpx

from .config import Settings
from .errors import ToolError

logger = logging.getLogger("slack-mcp.client")

DEFAULT_BASE_URL = "https://slack.com/api"


class SlackClient:
    """Thin wrapper over ``httpx.AsyncClient`` bound to one bot token."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "SlackClient":
        return cls(
            token=settings.check_token(),
            base_url=settings.slack_api_base_url,
            timeout=settings.slack_timeout_seconds,
        )

    async def __aenter__(self) -> "SlackClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def api_call(
        self,
        method: str,
        params: Optional[dict] = None,
        http_verb: str = "GET"
    ) -> dict[str, Any]:
        """Call a Web API method and return its decoded payload.

        ``None`` values are dropped from ``params``. GET sends them as the
        query string, POST as a JSON body.
        """
        payload = {k: v for k, v in (params or {}).items() if v is not None}
        if http_verb == "POST":
            response = await self._http.post(f"/{method}", json=payload)
        else:
            response = await self._http.get(f"/{method}", params=payload)
        response.raise_for_status()

        try:
            data = response.json()
        except ValueError as e:
            raise ToolError(f"Malformed response from {method}", cause=e) from e
        if not isinstance(data, dict):
            raise ToolError(f"Malformed response from {method}: expected an object")

        if not data.get("ok"):
            logger.warning(f"Slack method {method} returned error: {data.get('error')}")
        return data

    # ============================================================================
    # Web API methods
    # ============================================================================

    async def auth_test(self) -> dict[str, Any]:
        return await self.api_call("auth.test", http_verb="POST")

    async def conversations_list(
        self,
        types: Optional[str] = None,
        exclude_archived: Optional[bool] = None,
        limit: Optional[int] = None,
        cursor: Optional[str] = None
    ) -> dict[str, Any]:
        return await self.api_call("conversations.list", {
            "types": types,
            "exclude_archived": exclude_archived,
            "limit": limit,
            "cursor": cursor,
        })

    async def conversations_history(
        self,
        channel: str,
        limit: Optional[int] = None,
        oldest: Optional[str] = None,
        latest: Optional[str] = None,
        include_all_metadata: Optional[bool] = None
    ) -> dict[str, Any]:
        return await self.api_call("conversations.history", {
            "channel": channel,
            "limit": limit,
            "oldest": oldest,
            "latest": latest,
            "include_all_metadata": include_all_metadata,
        })

    async def chat_post_message(
        self,
        channel: str,
        text: str,
        thread_ts: Optional[str] = None,
        unfurl_links: bool = True,
        unfurl_media: bool = True
    ) -> dict[str, Any]:
        return await self.api_call("chat.postMessage", {
            "channel": channel,
            "text": text,
            "thread_ts": thread_ts,
            "unfurl_links": unfurl_links,
            "unfurl_media": unfurl_media,
        }, http_verb="POST")

    async def search_messages(
        self,
        query: str,
        sort: Optional[str] = None,
        sort_dir: Optional[str] = None,
        count: Optional[int] = None,
        page: Optional[int] = None
    ) -> dict[str, Any]:
        return await self.api_call("search.messages", {
            "query": query,
            "sort": sort,
            "sort_dir": sort_dir,
            "count": count,
            "page": page,
        })

    async def users_list(
        self,
        limit: Optional[int] = None,
        cursor: Optional[str] = None
    ) -> dict[str, Any]:
        return await self.api_call("users.list", {"limit": limit, "cursor": cursor})

    async def users_info(self, user: str) -> dict[str, Any]:
        return await self.api_call("users.info", {"user": user})
