"""E2E test configuration and fixtures."""
from __future__ import annotations

import pytest

from my_mcp_server import handler_registry
from my_mcp_server.config import Config, set_config
from my_mcp_server.mcp_server import McpServer

SERVER_NAME = "e2e-server"
SERVER_VERSION = "0.0.1-test"


@pytest.fixture
def server(monkeypatch):
    """Low-level MCP server over the sealed default registry.

    The seal is undone after the test so unit tests can keep registering.
    """
    config = Config(server_name=SERVER_NAME, server_version=SERVER_VERSION)
    set_config(config)
    monkeypatch.setattr(handler_registry, "_sealed", False)

    mcp_server = McpServer(config)
    handler_registry.seal()
    return mcp_server.server
