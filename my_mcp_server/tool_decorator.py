from typing import Any, Callable, Optional

from pydantic import BaseModel

from .handler_registry import register_tool
from .handler_wrappers import HandlerError, wrap_handler  # noqa: F401 - HandlerError re-exported for convenience
from .invocation import ToolOutput
from .schemas import NoParams


# ------------------------------------------------------------------------------
# Tool - Decorator class that registers functions as MCP tools
# ------------------------------------------------------------------------------
# Usage:
#   class GreetParams(Params):
#       name: str = Field(description="...")
#
#   @Tool("greet", "Description for AI", params=GreetParams)
#   def greet(name: str) -> str:
#       ...
#
# Parameters:
#   - name: Unique tool identifier exposed to MCP clients
#   - description: Shown to AI to understand when/how to use the tool
#   - params: Pydantic model (subclass of schemas.Params) for the input shape.
#             The dispatcher validates against it and passes the fields as
#             keyword arguments, so the function signature must match.
#   - output: Output model; defaults to ToolOutput (list of text blocks)
#   - title: Optional human-readable display name
#
# What happens at import time:
#   1. Wraps function with _auto_response (normalizes return values)
#   2. Wraps with _error_handler (domain errors -> "오류: ..." text)
#   3. Stores in the handler registry (duplicate names are rejected)
# ------------------------------------------------------------------------------
class Tool:
    def __init__(
        self,
        name: str,
        description: str,
        handler: Optional[Callable[..., Any]] = None,
        *,
        params: type[BaseModel] = NoParams,
        output: type[BaseModel] = ToolOutput,
        title: Optional[str] = None,
    ):
        self.name = name
        self.description = description
        self.params = params
        self.output = output
        self.title = title

        # Support both @Tool(...) decorator and Tool(..., handler=fn) direct call
        if handler is not None:
            self._register(handler)

    # Called when used as @Tool(...) decorator
    def __call__(self, func: Callable[..., Any]) -> Callable[..., Any]:
        self._register(func)
        return func  # Return original so it can be called directly for testing

    def _register(self, func: Callable[..., Any]) -> None:
        register_tool(
            self.name,
            self.description,
            self.params,
            self.output,
            wrap_handler(self.name, func),
            title=self.title,
            original=func,
        )
