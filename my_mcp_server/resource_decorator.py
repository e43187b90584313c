from typing import Any, Callable, Optional

from .handler_registry import register_resource
from .handler_wrappers import (
    HandlerError,  # noqa: F401 - re-exported for convenience
    wrap_handler,
)


# ------------------------------------------------------------------------------
# Resource - Decorator class that registers functions as MCP resources
# ------------------------------------------------------------------------------
# Usage:
#   @Resource("server://info", "Description for AI", name="server-info",
#             mime_type="application/json")
#   def server_info() -> str:
#       ...
#
# Parameters:
#   - uri: Resource URI exposed to MCP clients (unique, used for lookup)
#   - description: Shown to AI to understand what the resource provides
#   - name: Unique resource name (required - explicit, not derived from URI)
#   - mime_type: MIME type of the produced text (default text/plain)
#   - title: Optional human-readable display name
#
# Resources are read-only and take no arguments. The producer runs again on
# every read; nothing is cached.
#
# What happens at import time:
#   1. Wraps with _auto_response and _error_handler (same as tools)
#   2. Stores in the handler registry keyed by URI
# ------------------------------------------------------------------------------
class Resource:
    """Decorator for MCP resources.

    Usage:
        @Resource(
            "server://info",
            "Server metadata and tool manifest",
            name="server-info",
            mime_type="application/json",
        )
        def server_info() -> str:
            return json.dumps({...})

    Args:
        uri: Resource URI exposed to MCP clients (e.g., "server://info")
        description: Explanation of what the resource provides (shown to AI)
        name: Unique resource name (required)
        mime_type: MIME type of the content (defaults to "text/plain")
        title: Optional human-readable display name (defaults to None)
    """

    def __init__(
        self,
        uri: str,
        description: str,
        name: str,
        *,
        mime_type: str = "text/plain",
        title: Optional[str] = None,
    ):
        self.uri = uri
        self.description = description
        self.name = name
        self.mime_type = mime_type
        self.title = title

    def __call__(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register the decorated function as an MCP resource."""
        register_resource(
            self.name,
            self.uri,
            self.description,
            self.mime_type,
            wrap_handler(self.name, func),
            title=self.title,
            original=func,
        )
        return func  # Return original so it can be called directly for testing
