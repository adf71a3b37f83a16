"""Slack MCP Server - Model Context Protocol integration for Slack.

This package exposes the Slack Web API as MCP tools, enabling AI assistants
to read and post messages, browse channels and look up users.

Modules:
- server: stdio MCP server implementation
- tools: MCP tool definitions
- handlers: Tool implementation handlers and dispatch
- resolver: Channel/user name to ID resolution
- formatters: Response projection utilities
- envelope: Uniform tool result model
- slack_client: Async Slack Web API client
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
