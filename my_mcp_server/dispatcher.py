"""Dispatcher that routes invocation requests to registered handlers.

For every request it:
1. Looks up the capability (UnknownCapabilityError if absent)
2. Validates raw arguments against the params model (InvalidArgumentError)
3. Awaits the wrapped handler with typed, defaulted keyword arguments
4. Wraps the returned text blocks into the canonical result for the category

Steps 1 and 2 are protocol-level and raise. Anything going wrong inside the
handler is a domain error and has already been turned into "오류: ..." text
by the handler wrappers, so step 3 never raises for ordinary exceptions.
"""

from typing import Any, Mapping, Optional, Union
import logging

from pydantic import BaseModel, ValidationError

from .handler_registry import (
    PROMPT,
    RESOURCE,
    TOOL,
    Capability,
    InvalidArgumentError,
    get_capability,
)
from .invocation import (
    InvocationRequest,
    PromptMessage,
    PromptResult,
    ResourceContents,
    ResourceResult,
    TextBlock,
    ToolResult,
)
from .schemas import wire_name

logger = logging.getLogger(__name__)

InvocationResult = Union[ToolResult, ResourceResult, PromptResult]


def validate_arguments(capability: Capability, raw_arguments: Optional[Mapping[str, Any]]) -> BaseModel:
    """Validate raw wire arguments against the capability's params model.

    Raises:
        InvalidArgumentError: With one violation per offending field
    """
    try:
        return capability.params.model_validate(dict(raw_arguments or {}))
    except ValidationError as e:
        violations = [
            {
                "field": ".".join(str(part) for part in error["loc"]) or "(root)",
                "message": error["msg"],
                "value": error.get("input"),
            }
            for error in e.errors(include_url=False)
        ]
        raise InvalidArgumentError(capability.category, capability.name, violations) from e


def _handler_kwargs(params: BaseModel) -> dict[str, Any]:
    # Python field names, not wire aliases (forecastDays -> forecast_days)
    return {name: getattr(params, name) for name in type(params).model_fields}


async def invoke(category: str, name: str, raw_arguments: Optional[Mapping[str, Any]] = None) -> InvocationResult:
    """Invoke a registered capability.

    Args:
        category: TOOL, RESOURCE or PROMPT
        name: Capability name (resource URI for resources)
        raw_arguments: Untyped arguments from the wire

    Returns:
        ToolResult, ResourceResult or PromptResult depending on category

    Raises:
        UnknownCapabilityError: No such capability
        InvalidArgumentError: Arguments failed validation

    Example:
        >>> result = await invoke(TOOL, "greet", {"name": "Alice"})
        >>> result.text
        'Hey there, Alice! 👋 Nice to meet you!'
    """
    capability = get_capability(category, name)
    params = validate_arguments(capability, raw_arguments)

    logger.info("Invoking %s %s", category, name)
    blocks: list[TextBlock] = await capability.handler(**_handler_kwargs(params))

    if category == TOOL:
        return _tool_result(capability, blocks)
    if category == RESOURCE:
        return _resource_result(capability, blocks)
    if category == PROMPT:
        return _prompt_result(capability, blocks)
    raise ValueError(f"Unknown category: {category}")


async def process(request: InvocationRequest) -> InvocationResult:
    """Convenience wrapper taking an InvocationRequest."""
    return await invoke(request.category, request.name, request.arguments)


def _tool_result(capability: Capability, blocks: list[TextBlock]) -> ToolResult:
    structured = {"content": [block.model_dump() for block in blocks]}
    if capability.output is not None:
        # Mirror must satisfy the advertised output schema
        structured = capability.output.model_validate(structured).model_dump(mode="json")
    return ToolResult(content=blocks, structured_content=structured)


def _resource_result(capability: Capability, blocks: list[TextBlock]) -> ResourceResult:
    text = "\n".join(block.text for block in blocks)
    mime_type = capability.mime_type or "text/plain"
    if mime_type == "application/json" and any(block.is_error for block in blocks):
        # Error text is not JSON; do not mislabel it
        mime_type = "text/plain"
    return ResourceResult(contents=[
        ResourceContents(uri=capability.key, mime_type=mime_type, text=text),
    ])


def _prompt_result(capability: Capability, items: list[Union[TextBlock, PromptMessage]]) -> PromptResult:
    # Bare text blocks (including rendered errors) are user messages
    return PromptResult(
        description=capability.description,
        messages=[
            item if isinstance(item, PromptMessage) else PromptMessage(role="user", content=item)
            for item in items
        ],
    )


def describe_arguments(capability: Capability) -> list[dict[str, Any]]:
    """Argument list for prompt listings: name, description, required."""
    return [
        {
            "name": wire_name(name, info),
            "description": info.description,
            "required": info.is_required(),
        }
        for name, info in capability.params.model_fields.items()
    ]
