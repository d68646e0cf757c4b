"""MCP stdio server exposing the resource operations."""

from __future__ import annotations

from typing import Any

import mcp.types as types
from loguru import logger
from mcp.server import Server
from mcp.server.stdio import stdio_server

from . import __version__
from .errors import OperationFailedError
from .tools import OperationRegistry

SERVER_NAME = "resource-hacker-mcp"


def create_server(registry: OperationRegistry) -> Server:
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def _list_tools() -> list[types.Tool]:
        return [
            types.Tool(name=spec.name, description=spec.description, inputSchema=spec.input_schema())
            for spec in registry.descriptors()
        ]

    @server.call_tool(validate_input=False)
    async def _call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        result = await registry.execute(name, arguments or {})
        if result.is_error:
            raise OperationFailedError(result.text)
        return [types.TextContent(type="text", text=result.text)]

    return server


async def serve(registry: OperationRegistry) -> None:
    """Serve until the client closes stdin."""
    server = create_server(registry)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Resource Hacker MCP server running on stdio (executable={})", registry.context.settings.executable)
        await server.run(read_stream, write_stream, server.create_initialization_options())
