"""Helper functions for E2E tests using an in-memory MCP client session."""
from __future__ import annotations

import json
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from mcp import ClientSession
from mcp.server import Server
from mcp.shared.memory import create_connected_server_and_client_session
from mcp.types import CallToolResult


@asynccontextmanager
async def connect(server: Server) -> AsyncIterator[ClientSession]:
    """Open an initialized client session talking to ``server`` in-process."""
    async with create_connected_server_and_client_session(server) as session:
        yield session


async def call_tool(session: ClientSession, name: str, args: dict[str, Any] | None = None) -> CallToolResult:
    """Call an MCP tool and return the raw result envelope.

    Args:
        session: Connected client session
        name: Tool name (e.g., "greet", "get-weather")
        args: Tool arguments as dict
    """
    return await session.call_tool(name, args or {})


def result_text(result: CallToolResult) -> str:
    """Join the text content blocks of a tool result."""
    return "\n".join(block.text for block in result.content if block.type == "text")


async def list_tools(session: ClientSession) -> list[dict[str, Any]]:
    """List all available MCP tools as plain dicts."""
    result = await session.list_tools()
    return [tool.model_dump(exclude_none=True) for tool in result.tools]


async def read_resource(session: ClientSession, uri: str) -> dict[str, Any]:
    """Read an MCP resource by URI.

    Returns:
        Parsed JSON when the content is JSON, otherwise {"text": ...}.
        The MIME type is included under "_mimeType".
    """
    result = await session.read_resource(uri)
    content = result.contents[0]
    try:
        body = json.loads(content.text)
    except json.JSONDecodeError:
        body = {"text": content.text}
    body["_mimeType"] = content.mimeType
    return body


async def list_resources(session: ClientSession) -> list[dict[str, Any]]:
    """List all available MCP resources as plain dicts (URIs as strings)."""
    result = await session.list_resources()
    return [resource.model_dump(mode="json", exclude_none=True) for resource in result.resources]


async def list_prompts(session: ClientSession) -> list[dict[str, Any]]:
    """List all available MCP prompts as plain dicts."""
    result = await session.list_prompts()
    return [prompt.model_dump(exclude_none=True) for prompt in result.prompts]


async def get_prompt(session: ClientSession, name: str, args: dict[str, str] | None = None) -> dict[str, Any]:
    """Get an MCP prompt by name.

    Returns:
        Dict with "description" and "messages" (role + text per message).
    """
    result = await session.get_prompt(name, args)
    return {
        "description": result.description,
        "messages": [
            {"role": message.role, "text": message.content.text}
            for message in result.messages
        ],
    }
