"""
my-mcp-server - Model Context Protocol server boilerplate.

Exposes a handful of example tools (greeting, calculator, time, geocoding,
weather, image generation), a server-info resource and a code-review prompt
to MCP clients over stdio or streamable HTTP.
"""

__version__ = "1.0.0"

SERVER_NAME = "my-mcp-server"
