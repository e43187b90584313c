from typing import Any, Callable, Optional

from pydantic import BaseModel

from .handler_registry import register_prompt
from .handler_wrappers import to_prompt_items, wrap_handler
from .schemas import NoParams


# ------------------------------------------------------------------------------
# Prompt - Decorator class that registers functions as MCP prompts
# ------------------------------------------------------------------------------
# Usage:
#   @Prompt("prompt_name", "Description for AI", params=MyPromptParams)
#   def my_prompt(arg: str, other: Optional[str] = None) -> str:
#       return f"Template with {arg}"
#
# Parameters:
#   - name: Unique prompt identifier exposed to MCP clients
#   - description: Shown to AI to understand when/how to use the prompt
#   - params: Pydantic model describing the prompt arguments (all strings on
#             the wire; optional fields need a default)
#   - title: Optional human-readable display name
#
# A returned string becomes a single "user" message; return a list of
# PromptMessage for role-tagged conversations. Prompts only generate text;
# they have no side effects.
# ------------------------------------------------------------------------------
class Prompt:
    """Decorator for MCP prompts.

    Usage:
        @Prompt("name", "description", params=MyParams)
        def my_prompt(arg: str) -> str:
            return f"Template with {arg}"

    Args:
        name: Unique identifier for the prompt
        description: Explanation of what the prompt does (shown to AI)
        params: Pydantic model for the prompt arguments
        title: Optional human-readable display name (defaults to None)
    """

    def __init__(
        self,
        name: str,
        description: str,
        *,
        params: type[BaseModel] = NoParams,
        title: Optional[str] = None,
    ):
        self.name = name
        self.description = description
        self.params = params
        self.title = title

    def __call__(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register the decorated function as an MCP prompt."""
        register_prompt(
            self.name,
            self.description,
            self.params,
            wrap_handler(self.name, func, to_prompt_items),
            title=self.title,
            original=func,
        )
        return func
