"""Shared fixtures: an in-memory stand-in for the Slack client."""
import pytest


class FakeSlackClient:
    """Records every Web API call and answers from canned payloads.

    ``responses`` maps a method name to either a payload dict or an exception
    instance to raise.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def calls_to(self, method):
        return [kwargs for name, kwargs in self.calls if name == method]

    async def _answer(self, method, **kwargs):
        self.calls.append((method, kwargs))
        response = self.responses.get(method, {"ok": True})
        if isinstance(response, Exception):
            raise response
        return response

    async def auth_test(self):
        return await self._answer("auth.test")

    async def conversations_list(self, **kwargs):
        return await self._answer("conversations.list", **kwargs)

    async def conversations_history(self, **kwargs):
        return await self._answer("conversations.history", **kwargs)

    async def chat_post_message(self, **kwargs):
        return await self._answer("chat.postMessage", **kwargs)

    async def search_messages(self, **kwargs):
        return await self._answer("search.messages", **kwargs)

    async def users_list(self, **kwargs):
        return await self._answer("users.list", **kwargs)

    async def users_info(self, **kwargs):
        return await self._answer("users.info", **kwargs)


CHANNELS = [
    {"id": "C123", "name": "general", "is_private": False, "is_member": True,
     "num_members": 42, "topic": {"value": "Company-wide"}, "purpose": {"value": "Announcements"}},
    {"id": "C456", "name": "random"},
    {"id": "G789", "name": "secret-project", "is_private": True},
]

MEMBERS = [
    {"id": "U001", "name": "alice", "real_name": "Alice Smith",
     "profile": {"display_name": "ally", "email": "alice@example.com"}},
    {"id": "U002", "name": "bob", "real_name": "Bob Jones", "profile": {"display_name": "bobby"}},
    {"id": "U003", "name": "slackbot", "is_bot": True, "profile": {}},
    {"id": "U004", "name": "carol", "deleted": True, "profile": {}},
]


@pytest.fixture
def channels():
    return [dict(ch) for ch in CHANNELS]


@pytest.fixture
def members():
    return [dict(m) for m in MEMBERS]


@pytest.fixture
def fake_client(channels, members):
    return FakeSlackClient({
        "conversations.list": {"ok": True, "channels": channels},
        "users.list": {"ok": True, "members": members},
    })
