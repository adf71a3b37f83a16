"""MCP tool definitions for the Slack server.

This module is the single list of tools exposed over ``tools/list``; the
dispatch map in ``handlers`` must cover exactly these names.
"""

from mcp.types import Tool


def get_tools() -> list[Tool]:
    """Get the list of all Slack MCP tools."""
    return [
        # ============================================================================
        # Messaging Tools
        # ============================================================================
        Tool(
            name="slack_send_message",
            description="Send a message to a Slack channel or direct message",
            inputSchema={
                "type": "object",
                "properties": {
                    "channel": {
                        "type": "string",
                        "description": "Channel name (with or without #) or channel ID. "
                                       "For DMs, use @username or user ID."
                    },
                    "text": {
                        "type": "string",
                        "description": "The message text to send. Supports Slack markdown formatting."
                    },
                    "thread_ts": {
                        "type": "string",
                        "description": "Optional: timestamp of parent message to reply in thread"
                    }
                },
                "required": ["channel", "text"]
            }
        ),
        Tool(
            name="slack_get_channel_history",
            description="Get recent messages from a Slack channel",
            inputSchema={
                "type": "object",
                "properties": {
                    "channel": {
                        "type": "string",
                        "description": "Channel name (with or without #) or channel ID"
                    },
                    "limit": {
                        "type": "number",
                        "description": "Number of messages to retrieve (max 1000)",
                        "default": 20,
                        "maximum": 1000
                    },
                    "oldest": {
                        "type": "string",
                        "description": "Start of time range (Unix timestamp)"
                    },
                    "latest": {
                        "type": "string",
                        "description": "End of time range (Unix timestamp)"
                    },
                    "include_all_metadata": {
                        "type": "boolean",
                        "description": "Include all metadata in response",
                        "default": False
                    }
                },
                "required": ["channel"]
            }
        ),
        Tool(
            name="slack_search_messages",
            description="Search for messages across Slack channels",
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "Search query. Supports Slack search syntax "
                                       "(e.g., \"from:@user\", \"before:2024-01-01\")"
                    },
                    "channel": {
                        "type": "string",
                        "description": "Optional: limit search to specific channel (name or ID)"
                    },
                    "sort": {
                        "type": "string",
                        "enum": ["timestamp", "score"],
                        "description": "Sort results by: timestamp, score",
                        "default": "timestamp"
                    },
                    "sort_dir": {
                        "type": "string",
                        "enum": ["asc", "desc"],
                        "description": "Sort direction: asc, desc",
                        "default": "desc"
                    },
                    "count": {
                        "type": "number",
                        "description": "Number of results to return (max 100)",
                        "default": 20,
                        "maximum": 100
                    },
                    "page": {
                        "type": "number",
                        "description": "Page number for pagination",
                        "default": 1
                    }
                },
                "required": ["query"]
            }
        ),
        # ============================================================================
        # Channel Tools
        # ============================================================================
        Tool(
            name="slack_list_channels",
            description="List Slack channels that the bot has access to",
            inputSchema={
                "type": "object",
                "properties": {
                    "types": {
                        "type": "string",
                        "description": "Channel types to include: public_channel, private_channel, mpim, im",
                        "default": "public_channel,private_channel"
                    },
                    "exclude_archived": {
                        "type": "boolean",
                        "description": "Whether to exclude archived channels",
                        "default": True
                    },
                    "limit": {
                        "type": "number",
                        "description": "Maximum number of channels to return",
                        "default": 100
                    }
                },
                "required": []
            }
        ),
        # ============================================================================
        # User Tools
        # ============================================================================
        Tool(
            name="slack_get_user_info",
            description="Get information about a specific Slack user",
            inputSchema={
                "type": "object",
                "properties": {
                    "user": {
                        "type": "string",
                        "description": "Username (with or without @) or user ID"
                    }
                },
                "required": ["user"]
            }
        ),
        Tool(
            name="slack_list_users",
            description="List users in the Slack workspace (deleted users and bots are omitted). "
                       "Pass response_metadata.next_cursor back as cursor to get the next page.",
            inputSchema={
                "type": "object",
                "properties": {
                    "limit": {
                        "type": "number",
                        "description": "Maximum number of users to return",
                        "default": 50
                    },
                    "cursor": {
                        "type": "string",
                        "description": "Pagination cursor for getting next page of results"
                    }
                },
                "required": []
            }
        ),
    ]


def get_tool_names() -> list[str]:
    return [tool.name for tool in get_tools()]
