"""E2E tests for MCP resources."""
from __future__ import annotations

import pytest
from mcp.shared.exceptions import McpError

from .conftest import SERVER_NAME, SERVER_VERSION
from .helpers import connect, list_resources, read_resource


class TestResourceDiscovery:
    """Tests for resource listing and discovery."""

    @pytest.mark.asyncio
    async def test_server_info_resource_listed(self, server):
        """server://info should be registered with its name and MIME type."""
        async with connect(server) as session:
            resources = await list_resources(session)

        info = next(r for r in resources if r["uri"] == "server://info")
        assert info["name"] == "server-info"
        assert info["mimeType"] == "application/json"
        assert info["description"] == "현재 서버 정보와 사용 가능한 도구 목록"


class TestServerInfoResource:
    """Tests for reading server://info."""

    @pytest.mark.asyncio
    async def test_read_server_info(self, server):
        async with connect(server) as session:
            result = await read_resource(session, "server://info")

        assert result["_mimeType"] == "application/json"
        assert result["server"]["name"] == SERVER_NAME
        assert result["server"]["version"] == SERVER_VERSION
        assert result["server"]["uptime"] >= 0
        assert len(result["tools"]) == 6

    @pytest.mark.asyncio
    async def test_unknown_resource_is_protocol_error(self, server):
        async with connect(server) as session:
            with pytest.raises(McpError, match="Unknown resource"):
                await session.read_resource("server://missing")
