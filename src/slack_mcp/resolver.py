"""Resolve human-friendly channel and user references to Slack IDs.

Inputs already in ID form are returned untouched. Names are looked up with a
single directory listing call per resolution; nothing is cached, and only the
first page of the directory is scanned.
"""
import logging
from typing import TYPE_CHECKING, Callable, Optional

from .errors import ResolutionError

if TYPE_CHECKING:
    from .slack_client import SlackClient

logger = logging.getLogger("slack-mcp.resolver")

CHANNEL_ID_PREFIXES = ("C", "D", "G")
USER_ID_PREFIXES = ("U", "W")

# Page size for the channel directory scan. Channels past this are not found.
CHANNEL_LISTING_LIMIT = 1000
CHANNEL_LISTING_TYPES = "public_channel,private_channel"


def is_channel_id(reference: str) -> bool:
    return reference.startswith(CHANNEL_ID_PREFIXES)


def is_user_id(reference: str) -> bool:
    return reference.startswith(USER_ID_PREFIXES)


# Candidate name fields for user matching, in priority order.
USER_NAME_FIELDS: list[Callable[[dict], Optional[str]]] = [
    lambda user: user.get("name"),
    lambda user: user.get("real_name"),
    lambda user: (user.get("profile") or {}).get("display_name"),
]


def find_channel(channels: list[dict], name: str) -> Optional[dict]:
    """Return the first channel whose name equals ``name`` exactly."""
    if not name:
        return None
    return next((ch for ch in channels if ch.get("name") == name), None)


def find_user(members: list[dict], name: str) -> Optional[dict]:
    """Return the best user match for ``name``.

    A handle match anywhere in the list beats a real-name match, which beats a
    display-name match. Within one field the first user in listing order wins.
    """
    if not name:
        return None
    for field in USER_NAME_FIELDS:
        for member in members:
            if field(member) == name:
                return member
    return None


async def resolve_channel_id(client: "SlackClient", reference: str) -> str:
    """Resolve ``reference`` (ID, ``name`` or ``#name``) to a channel ID.

    Raises:
        ResolutionError: no channel matched, or the listing call failed.
    """
    if is_channel_id(reference):
        return reference

    name = reference[1:] if reference.startswith("#") else reference

    try:
        result = await client.conversations_list(types=CHANNEL_LISTING_TYPES, limit=CHANNEL_LISTING_LIMIT)
    except Exception as e:
        logger.error(f"Channel listing failed while resolving '{reference}': {e}")
        raise ResolutionError(f"Failed to resolve channel '{reference}': {e}", reference, cause=e) from e

    if not result.get("ok"):
        error = result.get("error") or "conversations.list failed"
        raise ResolutionError(f"Failed to resolve channel '{reference}': {error}", reference)

    channel = find_channel(result.get("channels") or [], name)
    if channel and channel.get("id"):
        logger.info(f"Resolved channel '{reference}' to {channel['id']}")
        return channel["id"]

    raise ResolutionError(
        f"Failed to resolve channel '{reference}': Channel '{reference}' not found", reference
    )


async def resolve_user_id(client: "SlackClient", reference: str) -> str:
    """Resolve ``reference`` (ID, ``name`` or ``@name``) to a user ID.

    Raises:
        ResolutionError: no user matched, or the listing call failed.
    """
    if is_user_id(reference):
        return reference

    name = reference[1:] if reference.startswith("@") else reference

    try:
        result = await client.users_list()
    except Exception as e:
        logger.error(f"User listing failed while resolving '{reference}': {e}")
        raise ResolutionError(f"Failed to resolve user '{reference}': {e}", reference, cause=e) from e

    if not result.get("ok"):
        error = result.get("error") or "users.list failed"
        raise ResolutionError(f"Failed to resolve user '{reference}': {error}", reference)

    user = find_user(result.get("members") or [], name)
    if user and user.get("id"):
        logger.info(f"Resolved user '{reference}' to {user['id']}")
        return user["id"]

    raise ResolutionError(
        f"Failed to resolve user '{reference}': User '{reference}' not found", reference
    )
