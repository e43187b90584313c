"""Request and response types exchanged between the transport and the dispatcher.

The transport adapter builds an InvocationRequest for every incoming call and
hands it to the dispatcher, which answers with one of the result models below.
Nothing here outlives a single request/response cycle.
"""

from dataclasses import dataclass, field
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, PrivateAttr


@dataclass
class InvocationRequest:
    """Incoming call for a registered capability.

    Attributes:
        category: "tool", "resource" or "prompt".
        name: Capability name (for resources, the URI).
        arguments: Raw, untyped arguments from the wire.

    Example:
        >>> request = InvocationRequest(
        ...     category="tool",
        ...     name="greet",
        ...     arguments={"name": "Alice"},
        ... )
    """

    category: str
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


class TextBlock(BaseModel):
    """A single text content block."""

    type: Literal["text"] = "text"
    text: str

    # Set on blocks rendered from a handler failure; never serialized
    _is_error: bool = PrivateAttr(default=False)

    @property
    def is_error(self) -> bool:
        return self._is_error

    @classmethod
    def error(cls, text: str) -> "TextBlock":
        """Block carrying rendered error text for a failed handler."""
        block = cls(text=text)
        block._is_error = True
        return block


class ToolOutput(BaseModel):
    """Default output shape for tools: an ordered list of text blocks.

    Serves both as the advertised outputSchema and as the validator for the
    structured mirror of every tool result.
    """

    content: list[TextBlock] = Field(description="Text content returned by the tool")


class ToolResult(BaseModel):
    """Result of a tool call.

    ``structured_content`` mirrors ``content`` for machine consumers; domain
    errors arrive here too, as ordinary text.
    """

    content: list[TextBlock]
    structured_content: Optional[dict[str, Any]] = None

    @property
    def text(self) -> str:
        """All text blocks joined by newlines (handy for tests and logs)."""
        return "\n".join(block.text for block in self.content)


class ResourceContents(BaseModel):
    uri: str
    mime_type: str
    text: str


class ResourceResult(BaseModel):
    """Result of a resource read."""

    contents: list[ResourceContents]


class PromptMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: TextBlock


class PromptResult(BaseModel):
    """Result of rendering a prompt template."""

    description: Optional[str] = None
    messages: list[PromptMessage]
