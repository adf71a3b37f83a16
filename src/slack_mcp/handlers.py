"""Slack tool handlers and dispatch.

All handlers follow a consistent pattern:
- Accept: arguments dict and the Slack client handle
- Validate required arguments before any remote call
- Resolve channel/user references through ``resolver``
- Make exactly one primary Web API call and check its ``ok`` flag
- Project the payload through ``formatters``
- Return a ``ToolResult``; no exception escapes a handler

Unknown tool names are the one case surfaced as a protocol error (see
``dispatch``).
"""
import functools
import logging
from typing import Awaitable, Callable, Optional

from mcp.shared.exceptions import McpError
from mcp.types import ErrorData, METHOD_NOT_FOUND

from . import formatters
from .envelope import ToolResult
from .errors import ErrorKind, MissingArgumentError, RemoteError, ToolError
from .resolver import is_user_id, resolve_channel_id, resolve_user_id
from .slack_client import SlackClient

logger = logging.getLogger("slack-mcp.handlers")

Handler = Callable[[dict, SlackClient], Awaitable[ToolResult]]


def tool_handler(stage: str) -> Callable[[Handler], Handler]:
    """Wrap a handler so every outcome becomes a ToolResult.

    Resolution and unexpected errors get ``stage`` as a message prefix, e.g.
    ``Error sending message: ...``. Validation and remote errors are passed
    through as-is.
    """
    def decorator(func: Handler) -> Handler:
        @functools.wraps(func)
        async def wrapper(arguments: dict, client: SlackClient) -> ToolResult:
            try:
                return await func(arguments, client)
            except ToolError as e:
                if e.kind in (ErrorKind.VALIDATION, ErrorKind.REMOTE):
                    logger.warning(f"{func.__name__} failed ({e.kind.value}): {e.message}")
                    return ToolResult.from_error(e)
                logger.error(f"{func.__name__} failed ({e.kind.value}): {e.message}")
                return ToolResult.from_error(e.with_prefix(stage))
            except Exception as e:
                logger.exception(f"Unexpected error in {func.__name__}: {type(e).__name__}: {e}")
                return ToolResult.from_error(ToolError(f"{stage}: {e}", ErrorKind.TRANSPORT, cause=e))
        return wrapper
    return decorator


def _require_ok(result: dict, method: str, fallback: str) -> dict:
    """Raise RemoteError unless Slack reported success."""
    if not result.get("ok"):
        raise RemoteError(result.get("error") or fallback, method=method)
    return result


def _int_arg(arguments: dict, key: str, default: int) -> int:
    value = arguments.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ToolError(f"{key} must be a number, got {value!r}", ErrorKind.VALIDATION, cause=e) from e


def _bool_arg(arguments: dict, key: str, default: bool) -> bool:
    """Accept JSON booleans and the strings "true"/"false" (any case)."""
    value = arguments.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ToolError(f"{key} must be a boolean, got {value!r}", ErrorKind.VALIDATION)


def _str_arg(arguments: dict, key: str) -> Optional[str]:
    value = arguments.get(key)
    if value is not None and not isinstance(value, str):
        raise ToolError(f"{key} must be a string, got {value!r}", ErrorKind.VALIDATION)
    return value


async def _resolve_conversation(client: SlackClient, reference: str) -> str:
    """Resolve a send target: channels by name/ID, DMs by @user or user ID."""
    if reference.startswith("@") or is_user_id(reference):
        return await resolve_user_id(client, reference)
    return await resolve_channel_id(client, reference)


# ============================================================================
# Messaging Handlers
# ============================================================================

@tool_handler("Error sending message")
async def handle_send_message(arguments: dict, client: SlackClient) -> ToolResult:
    """Post a message to a channel, DM or thread."""
    channel = _str_arg(arguments, "channel")
    text = _str_arg(arguments, "text")
    if not channel or not text:
        raise MissingArgumentError("Both channel and text are required")

    channel_id = await _resolve_conversation(client, channel)

    result = await client.chat_post_message(
        channel=channel_id,
        text=text,
        thread_ts=arguments.get("thread_ts") or None,
        unfurl_links=True,
        unfurl_media=True,
    )
    _require_ok(result, "chat.postMessage", "Failed to send message")
    logger.info(f"Posted message to {result.get('channel')} (ts: {result.get('ts')})")

    return ToolResult.ok({
        "channel": result.get("channel") or channel_id,
        "ts": result.get("ts") or "",
        "message": result.get("message") or {},
    })


@tool_handler("Error getting channel history")
async def handle_get_channel_history(arguments: dict, client: SlackClient) -> ToolResult:
    """Fetch recent messages from one channel, optionally bounded in time."""
    channel = _str_arg(arguments, "channel")
    if not channel:
        raise MissingArgumentError("Channel is required")

    limit = _int_arg(arguments, "limit", 20)
    include_all_metadata = _bool_arg(arguments, "include_all_metadata", False)

    channel_id = await resolve_channel_id(client, channel)

    result = await client.conversations_history(
        channel=channel_id,
        limit=limit,
        oldest=arguments.get("oldest"),
        latest=arguments.get("latest"),
        include_all_metadata=include_all_metadata,
    )
    _require_ok(result, "conversations.history", "Failed to get channel history")

    messages = [formatters.format_history_message(msg) for msg in result.get("messages") or []]
    logger.info(f"Retrieved {len(messages)} messages from {channel_id}")

    return ToolResult.ok({
        "messages": messages,
        "has_more": bool(result.get("has_more")),
        "channel_id": channel_id,
    })


@tool_handler("Error searching messages")
async def handle_search_messages(arguments: dict, client: SlackClient) -> ToolResult:
    """Search messages, optionally scoped to one channel.

    Channel scoping appends Slack's ``in:<#CHANNEL_ID>`` modifier to the query.
    """
    query = _str_arg(arguments, "query")
    if not query:
        raise MissingArgumentError("Search query is required")

    sort = arguments.get("sort") or "timestamp"
    sort_dir = arguments.get("sort_dir") or "desc"
    count = _int_arg(arguments, "count", 20)
    page = _int_arg(arguments, "page", 1)

    search_query = query
    channel = _str_arg(arguments, "channel")
    if channel:
        channel_id = await resolve_channel_id(client, channel)
        search_query = f"{query} in:<#{channel_id}>"

    result = await client.search_messages(
        query=search_query,
        sort=sort,
        sort_dir=sort_dir,
        count=count,
        page=page,
    )
    _require_ok(result, "search.messages", "Search failed")

    found = result.get("messages") or {}
    messages = [formatters.format_search_match(match) for match in found.get("matches") or []]
    logger.info(f"Search '{search_query}' returned {len(messages)} matches")

    return ToolResult.ok({
        "messages": messages,
        "total": found.get("total") or 0,
        "page": page,
        "per_page": count,
    })


# ============================================================================
# Channel Handlers
# ============================================================================

@tool_handler("Error listing channels")
async def handle_list_channels(arguments: dict, client: SlackClient) -> ToolResult:
    """List channels visible to the bot."""
    result = await client.conversations_list(
        types=arguments.get("types") or "public_channel,private_channel",
        exclude_archived=_bool_arg(arguments, "exclude_archived", True),
        limit=_int_arg(arguments, "limit", 100),
    )
    _require_ok(result, "conversations.list", "Failed to list channels")

    channels = [formatters.format_channel(ch) for ch in result.get("channels") or []]
    logger.info(f"Listed {len(channels)} channels")

    return ToolResult.ok({"channels": channels, "total": len(channels)})


# ============================================================================
# User Handlers
# ============================================================================

@tool_handler("Error getting user info")
async def handle_get_user_info(arguments: dict, client: SlackClient) -> ToolResult:
    """Fetch one user's full profile."""
    user = _str_arg(arguments, "user")
    if not user:
        raise MissingArgumentError("User is required")

    user_id = await resolve_user_id(client, user)

    result = await client.users_info(user=user_id)
    _require_ok(result, "users.info", "Failed to get user info")
    if not result.get("user"):
        raise RemoteError("Failed to get user info", method="users.info")

    return ToolResult.ok(formatters.format_user_info(result["user"]))


@tool_handler("Error listing users")
async def handle_list_users(arguments: dict, client: SlackClient) -> ToolResult:
    """List active human users, one page at a time."""
    result = await client.users_list(
        limit=_int_arg(arguments, "limit", 50),
        cursor=arguments.get("cursor") or None,
    )
    _require_ok(result, "users.list", "Failed to list users")

    users = [
        formatters.format_user_summary(member)
        for member in result.get("members") or []
        if not member.get("deleted") and not member.get("is_bot")
    ]
    logger.info(f"Listed {len(users)} users")

    return ToolResult.ok({
        "users": users,
        "response_metadata": formatters.format_response_metadata(result.get("response_metadata")),
    })


# ============================================================================
# Dispatch
# ============================================================================

HANDLERS: dict[str, Handler] = {
    "slack_send_message": handle_send_message,
    "slack_list_channels": handle_list_channels,
    "slack_get_channel_history": handle_get_channel_history,
    "slack_search_messages": handle_search_messages,
    "slack_get_user_info": handle_get_user_info,
    "slack_list_users": handle_list_users,
}


async def dispatch(name: str, arguments: Optional[dict], client: SlackClient) -> ToolResult:
    """Run the handler registered for ``name``.

    Raises:
        McpError: METHOD_NOT_FOUND when no tool has that name.
    """
    handler = HANDLERS.get(name)
    if handler is None:
        logger.warning(f"Unknown tool requested: {name}")
        raise McpError(ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}"))

    return await handler(dict(arguments or {}), client)
