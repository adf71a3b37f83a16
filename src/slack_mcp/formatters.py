"""Projection of raw Slack API records into stable tool output shapes.

Every projected field is always present: missing optional values become
``""``, ``0``, ``False``, ``[]`` or ``{}``.
"""
from typing import Optional


def _profile(record: dict) -> dict:
    return record.get("profile") or {}


def format_channel(channel: dict) -> dict:
    """Project a conversations.list channel record."""
    return {
        "id": channel.get("id") or "",
        "name": channel.get("name") or "",
        "is_private": bool(channel.get("is_private")),
        "is_member": bool(channel.get("is_member")),
        "is_archived": bool(channel.get("is_archived")),
        "num_members": channel.get("num_members") or 0,
        "topic": (channel.get("topic") or {}).get("value") or "",
        "purpose": (channel.get("purpose") or {}).get("value") or "",
    }


def format_history_message(msg: dict) -> dict:
    """Project a conversations.history message record."""
    return {
        "type": msg.get("type") or "",
        "user": msg.get("user") or "",
        "username": msg.get("username") or "",
        "text": msg.get("text") or "",
        "ts": msg.get("ts") or "",
        "thread_ts": msg.get("thread_ts") or "",
        "reply_count": msg.get("reply_count") or 0,
        "reactions": msg.get("reactions") or [],
        "files": msg.get("files") or [],
        "attachments": msg.get("attachments") or [],
    }


def format_search_match(match: dict) -> dict:
    """Project a search.messages match record."""
    channel = match.get("channel") or {}
    return {
        "type": match.get("type") or "",
        "user": match.get("user") or "",
        "username": match.get("username") or "",
        "text": match.get("text") or "",
        "ts": match.get("ts") or "",
        "channel": {
            "id": channel.get("id") or "",
            "name": channel.get("name") or "",
        },
        "permalink": match.get("permalink") or "",
    }


def format_user_info(user: dict) -> dict:
    """Project a users.info user record with its full profile."""
    profile = _profile(user)
    return {
        "id": user.get("id") or "",
        "name": user.get("name") or "",
        "real_name": user.get("real_name") or "",
        "display_name": profile.get("display_name") or "",
        "email": profile.get("email") or "",
        "is_bot": bool(user.get("is_bot")),
        "is_admin": bool(user.get("is_admin")),
        "is_owner": bool(user.get("is_owner")),
        "profile": {
            "real_name": profile.get("real_name") or "",
            "display_name": profile.get("display_name") or "",
            "email": profile.get("email") or "",
            "image_192": profile.get("image_192") or "",
            "status_text": profile.get("status_text") or "",
            "status_emoji": profile.get("status_emoji") or "",
            "title": profile.get("title") or "",
            "phone": profile.get("phone") or "",
        },
        "tz": user.get("tz") or "",
        "tz_label": user.get("tz_label") or "",
        "tz_offset": user.get("tz_offset") or 0,
    }


def format_user_summary(user: dict) -> dict:
    """Project a users.list member record."""
    profile = _profile(user)
    return {
        "id": user.get("id") or "",
        "name": user.get("name") or "",
        "real_name": user.get("real_name") or "",
        "display_name": profile.get("display_name") or "",
        "email": profile.get("email") or "",
        "is_admin": bool(user.get("is_admin")),
        "is_owner": bool(user.get("is_owner")),
        "status_text": profile.get("status_text") or "",
        "status_emoji": profile.get("status_emoji") or "",
    }


def format_response_metadata(metadata: Optional[dict]) -> dict:
    """Keep the pagination cursor from a list response."""
    return {"next_cursor": (metadata or {}).get("next_cursor") or ""}
