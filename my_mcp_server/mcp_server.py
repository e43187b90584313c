"""MCP transport adapter.

This module connects the MCP protocol to the capability registry. It uses the
low-level SDK server (``mcp.server.Server``) so that argument validation and
error shaping stay in the dispatcher instead of being done twice.

Architecture:
    - Listings: tools/resources/prompts are read from the sealed registry
    - Calls: every tools/call, resources/read and prompts/get becomes a
      dispatcher invocation
    - Errors: protocol-level CapabilityError is mapped to an MCP error with
      code INVALID_PARAMS; domain errors already arrive as "오류: ..." text
    - Transports: stdio (default) or streamable HTTP (starlette + uvicorn)

Concurrency:
    - One asyncio event loop; requests are served concurrently on it
    - The registry is read-only once sealed, so handlers share no mutable state
"""

import contextlib
import logging
from typing import Any, AsyncIterator, Iterable, Optional

import uvicorn
from mcp import types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from mcp.shared.exceptions import McpError
from pydantic import AnyUrl
from starlette.applications import Starlette
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

from . import dispatcher
from .config import Config
from .handler_registry import (
    PROMPT,
    RESOURCE,
    TOOL,
    CapabilityError,
    UnknownCapabilityError,
    list_capabilities,
    seal,
)
from .schemas import input_schema

logger = logging.getLogger(__name__)


def to_mcp_error(error: CapabilityError) -> McpError:
    """Translate a protocol-level dispatch error into an MCP error."""
    return McpError(types.ErrorData(
        code=types.INVALID_PARAMS,
        message=error.message,
        data=error.data or None,
    ))


def _text_content(blocks: Iterable[Any]) -> list[types.TextContent]:
    return [types.TextContent(type="text", text=block.text) for block in blocks]


class _StreamableHTTPEndpoint:
    """ASGI endpoint forwarding requests to the session manager."""

    def __init__(self, session_manager: StreamableHTTPSessionManager) -> None:
        self._session_manager = session_manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self._session_manager.handle_request(scope, receive, send)


class McpServer:
    """MCP server exposing the registered capabilities.

    Attributes:
        server: Low-level SDK server with all protocol handlers installed
        _config: Server configuration (name, version, transport mode, HTTP settings)
    """

    def __init__(self, config: Config) -> None:
        """Initialize MCP server.

        Args:
            config: Server configuration
        """
        self._config = config
        self.server: Server = Server(config.server_name, version=config.server_version)
        self._install_handlers()

    def _install_handlers(self) -> None:
        server = self.server

        @server.list_tools()
        async def list_tools() -> list[types.Tool]:
            return [
                types.Tool(
                    name=capability.name,
                    title=capability.title,
                    description=capability.description,
                    inputSchema=input_schema(capability.params),
                    outputSchema=input_schema(capability.output) if capability.output else None,
                )
                for capability in list_capabilities(TOOL)
            ]

        # Validation is done by the dispatcher against the params models
        @server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: Optional[dict[str, Any]]) -> Any:
            try:
                result = await dispatcher.invoke(TOOL, name, arguments)
            except CapabilityError as e:
                logger.warning("Rejected tool call %s: %s", name, e.message)
                raise to_mcp_error(e) from e
            return _text_content(result.content), result.structured_content

        @server.list_resources()
        async def list_resources() -> list[types.Resource]:
            return [
                types.Resource(
                    name=capability.name,
                    title=capability.title,
                    uri=AnyUrl(capability.uri),
                    description=capability.description,
                    mimeType=capability.mime_type,
                )
                for capability in list_capabilities(RESOURCE)
            ]

        @server.read_resource()
        async def read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
            try:
                result = await self._read_resource(str(uri))
            except CapabilityError as e:
                logger.warning("Rejected resource read %s: %s", uri, e.message)
                raise to_mcp_error(e) from e
            return [
                ReadResourceContents(content=contents.text, mime_type=contents.mime_type)
                for contents in result.contents
            ]

        @server.list_prompts()
        async def list_prompts() -> list[types.Prompt]:
            return [
                types.Prompt(
                    name=capability.name,
                    title=capability.title,
                    description=capability.description,
                    arguments=[
                        types.PromptArgument(**argument)
                        for argument in dispatcher.describe_arguments(capability)
                    ],
                )
                for capability in list_capabilities(PROMPT)
            ]

        @server.get_prompt()
        async def get_prompt(name: str, arguments: Optional[dict[str, str]]) -> types.GetPromptResult:
            try:
                result = await dispatcher.invoke(PROMPT, name, arguments)
            except CapabilityError as e:
                logger.warning("Rejected prompt %s: %s", name, e.message)
                raise to_mcp_error(e) from e
            return types.GetPromptResult(
                description=result.description,
                messages=[
                    types.PromptMessage(
                        role=message.role,
                        content=types.TextContent(type="text", text=message.content.text),
                    )
                    for message in result.messages
                ],
            )

    async def _read_resource(self, uri: str) -> Any:
        try:
            return await dispatcher.invoke(RESOURCE, uri)
        except UnknownCapabilityError:
            # URL normalization may append a slash ("server://info/")
            if not uri.endswith("/"):
                raise
            return await dispatcher.invoke(RESOURCE, uri.rstrip("/"))

    async def serve(self) -> None:
        """Seal the registry and serve on the configured transport."""
        seal()
        logger.info(
            "Starting %s %s (%s transport)",
            self._config.server_name, self._config.server_version, self._config.mode,
        )
        if self._config.mode == "http":
            await self._run_http_mode()
        else:
            await self._run_stdio_mode()

    async def _run_stdio_mode(self) -> None:
        """Serve over stdin/stdout. Logging goes to stderr."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )

    def http_app(self) -> Starlette:
        """Build the Starlette app serving streamable HTTP at ``http_path``."""
        session_manager = StreamableHTTPSessionManager(app=self.server)

        @contextlib.asynccontextmanager
        async def lifespan(app: Starlette) -> AsyncIterator[None]:
            async with session_manager.run():
                yield

        return Starlette(
            routes=[
                Route(self._config.http_path, endpoint=_StreamableHTTPEndpoint(session_manager)),
            ],
            lifespan=lifespan,
        )

    async def _run_http_mode(self) -> None:
        """Serve streamable HTTP via uvicorn until interrupted."""
        config = uvicorn.Config(
            self.http_app(),
            host=self._config.http_host,
            port=self._config.http_port,
            log_level="warning",
        )
        logger.info(
            "Listening on http://%s:%d%s",
            self._config.http_host, self._config.http_port, self._config.http_path,
        )
        await uvicorn.Server(config).serve()
