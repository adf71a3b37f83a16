"""Slack MCP Server - Expose the Slack Web API to AI assistants over stdio."""
import sys
import json
import asyncio
import logging
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from . import __version__
from . import tools
from . import handlers
from .config import get_settings
from .envelope import ToolResult
from .errors import ConfigurationError
from .slack_client import SlackClient

SERVER_NAME = "slack-mcp-server"

logger = logging.getLogger("slack-mcp")


def configure_logging(level: str = "INFO") -> None:
    """Send logs to stderr; stdout carries the MCP protocol."""
    logging.basicConfig(
        level=level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
        force=True
    )


def to_call_tool_result(result: ToolResult) -> types.CallToolResult:
    """Render an envelope as an MCP tool result.

    Tool failures are still successful protocol responses, flagged with isError.
    """
    if result.success:
        text = json.dumps(result.data, indent=2)
        return types.CallToolResult(content=[types.TextContent(type="text", text=text)])
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=result.error or "Tool execution failed")],
        isError=True,
    )


def create_server(client: Any) -> Server:
    """Build the MCP server bound to one Slack client handle."""
    app = Server(SERVER_NAME, version=__version__)

    @app.list_tools()
    async def list_tools() -> list[types.Tool]:
        """List available Slack tools."""
        return tools.get_tools()

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        """Handle MCP tool calls by delegating to the shared handlers.

        Registered directly rather than through ``app.call_tool()`` so that the
        METHOD_NOT_FOUND McpError from dispatch reaches the protocol layer
        instead of being folded into an error result.
        """
        name = request.params.name
        arguments = request.params.arguments or {}
        logger.info(f"Tool call: {name} with arguments: {arguments}")

        result = await handlers.dispatch(name, arguments, client)
        if not result.success:
            logger.info(f"Tool {name} returned failure ({result.error_kind}): {result.error}")
        return types.ServerResult(to_call_tool_result(result))

    app.request_handlers[types.CallToolRequest] = call_tool
    return app


async def check_connection(client: SlackClient) -> bool:
    """Verify the token against auth.test."""
    try:
        response = await client.auth_test()
    except Exception as e:
        logger.error(f"Slack connection failed: {type(e).__name__}: {e}")
        return False

    if not response.get("ok"):
        logger.error(f"Slack connection failed: {response.get('error')}")
        return False

    logger.info(f"Slack connection successful: {response.get('user')} (team: {response.get('team')})")
    return True


async def main() -> None:
    """Run the MCP server."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Starting Slack MCP Server...")

    async with SlackClient.from_settings(settings) as client:
        if not await check_connection(client):
            raise ConfigurationError("Failed to connect to Slack. Check your SLACK_BOT_TOKEN.")

        logger.info(f"Available tools: {', '.join(tools.get_tool_names())}")
        app = create_server(client)

        async with stdio_server() as (read_stream, write_stream):
            logger.info("Slack MCP Server started successfully")
            await app.run(read_stream, write_stream, app.create_initialization_options())


def run() -> None:
    """Console entry point."""
    configure_logging()
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutting down Slack MCP Server...")
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Fatal error: {type(e).__name__}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
