"""Shared test configuration and fixtures."""
from __future__ import annotations

from typing import Callable

import httpx
import pytest

from my_mcp_server import handler_registry, http_client
from my_mcp_server.config import Config, set_config
from my_mcp_server.primitives import load_all

# Register the real tools, resources and prompts once for the whole session
load_all()


@pytest.fixture(autouse=True)
def config():
    """Install a known config so the process environment never leaks in."""
    cfg = Config(hf_token=None)
    set_config(cfg)
    yield cfg
    set_config(None)


@pytest.fixture
def isolated_registry(monkeypatch):
    """Empty, unsealed registry for the duration of a test."""
    monkeypatch.setattr(
        handler_registry,
        "_registry",
        {category: {} for category in handler_registry.CATEGORIES},
    )
    monkeypatch.setattr(handler_registry, "_sealed", False)
    return handler_registry._registry


@pytest.fixture
def mock_transport(monkeypatch) -> Callable[[Callable[[httpx.Request], httpx.Response]], list[httpx.Request]]:
    """Route outbound HTTP through a handler function.

    Usage:
        requests = mock_transport(lambda request: httpx.Response(200, json=[]))

    Returns the list that collects every request sent.
    """
    def install(handler: Callable[[httpx.Request], httpx.Response]) -> list[httpx.Request]:
        seen: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        monkeypatch.setattr(http_client, "_transport", httpx.MockTransport(record))
        return seen

    return install
