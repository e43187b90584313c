# handler_wrappers.py
"""Shared wrappers for tool, resource and prompt handlers.

This module provides common functionality used by the @Tool, @Resource and
@Prompt decorators:
- Error handling wrapper (renders domain errors as ordinary text)
- Response normalization wrapper (turns return values into text blocks)

Error Handling Strategy:
    Handler functions raise HandlerError for expected failures (division by
    zero, upstream API errors, missing credentials). Any exception raised by a
    handler is a domain-level error: _error_handler catches it and returns the
    text "오류: {message}" as the sole content block, so the client receives a
    normal response instead of a protocol failure. Protocol-level errors
    (unknown capability, invalid arguments) never reach the handler; the
    dispatcher raises those before invoking it.
"""

from typing import Any, Awaitable, Callable, Optional, Union
from functools import wraps
import inspect
import logging

from .invocation import PromptMessage, TextBlock

logger = logging.getLogger(__name__)

ERROR_PREFIX = "오류: "
UNKNOWN_ERROR_MESSAGE = "알 수 없는 오류가 발생했습니다."


# ------------------------------------------------------------------------------
# HandlerError - Domain error raised by handlers
# ------------------------------------------------------------------------------
# Raise this in tool/resource/prompt functions to report a failure to the client.
# - message: What went wrong (rendered as "오류: {message}")
# - hint: Actionable suggestion, appended in parentheses (optional)
# - **data: Extra context for logs, e.g. status code or query (optional)
#
# Example: raise HandlerError("API 요청 실패: 503 Service Unavailable", status=503)
# ------------------------------------------------------------------------------
class HandlerError(Exception):
    """Structured domain error for handlers.

    Args:
        message: Description of what went wrong
        hint: Actionable suggestion for the client (optional)
        **data: Extra context, logged but not shown (optional)

    Example:
        raise HandlerError(
            "HF_TOKEN 환경 변수가 설정되지 않았습니다.",
            hint="Set HF_TOKEN in the environment or .env file",
        )
    """
    def __init__(self, message: str, hint: Optional[str] = None, **data: Any):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.data = data


def error_text(message: str) -> str:
    """Render a domain error message the way clients expect to see it."""
    return f"{ERROR_PREFIX}{message or UNKNOWN_ERROR_MESSAGE}"


# ------------------------------------------------------------------------------
# _error_handler - Outermost wrapper that catches exceptions
# ------------------------------------------------------------------------------
# Converts any exception into error text:
#   - HandlerError -> [TextBlock("오류: message (hint)")], logged at warning
#   - Other exceptions -> [TextBlock("오류: str(e)")], logged with traceback
# asyncio.CancelledError is a BaseException and passes through untouched.
# ------------------------------------------------------------------------------
def _error_handler(name: str, func: Callable[..., Awaitable[list[TextBlock]]]) -> Callable[..., Awaitable[list[TextBlock]]]:
    """Wrap a handler so that failures become text content.

    Args:
        name: Capability name, used in log messages
        func: The (already async) handler to wrap

    Returns:
        Async wrapper that never raises for ordinary exceptions
    """
    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> list[TextBlock]:
        try:
            return await func(*args, **kwargs)
        except HandlerError as e:
            logger.warning("Handler error in %s: %s (hint: %s, context: %s)",
                           name, e.message, e.hint, e.data)
            msg = e.message
            if e.hint:
                msg += f" ({e.hint})"
            return [TextBlock.error(error_text(msg))]
        except Exception as e:
            logger.exception("Unexpected handler error in %s: %s", name, e)
            return [TextBlock.error(error_text(str(e)))]

    return wrapper


# ------------------------------------------------------------------------------
# _auto_response - Normalize return values to a list of text blocks
# ------------------------------------------------------------------------------
# Awaits coroutine results, then:
#   - None -> []
#   - str -> [TextBlock(str)]
#   - TextBlock -> [block]
#   - list/tuple of str / TextBlock -> one block per item
# Prompts normalize with to_prompt_items instead, which also lets PromptMessage
# through. Anything else is a programming error and raises TypeError (which the
# surrounding _error_handler turns into error text).
# ------------------------------------------------------------------------------
def _auto_response(
    func: Callable[..., Any],
    normalize: Optional[Callable[[Any], list[Any]]] = None,
) -> Callable[..., Awaitable[list[Any]]]:
    normalize = normalize or to_text_blocks

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> list[Any]:
        result = func(*args, **kwargs)
        # Support both sync and async handler functions
        if inspect.isawaitable(result):
            result = await result
        return normalize(result)

    return wrapper


def to_text_blocks(result: Any) -> list[TextBlock]:
    if result is None:
        return []
    if isinstance(result, (str, TextBlock)):
        result = [result]
    if not isinstance(result, (list, tuple)):
        raise TypeError(f"Handler returned unsupported type: {type(result).__name__}")

    blocks: list[TextBlock] = []
    for item in result:
        if isinstance(item, TextBlock):
            blocks.append(item)
        elif isinstance(item, str):
            blocks.append(TextBlock(text=item))
        else:
            raise TypeError(f"Handler returned unsupported item: {type(item).__name__}")
    return blocks


def to_prompt_items(result: Any) -> list[Union[TextBlock, PromptMessage]]:
    """Like to_text_blocks, but role-tagged PromptMessage items are kept as is."""
    if isinstance(result, PromptMessage):
        return [result]
    if not isinstance(result, (list, tuple)):
        return list(to_text_blocks(result))

    items: list[Union[TextBlock, PromptMessage]] = []
    for item in result:
        if isinstance(item, PromptMessage):
            items.append(item)
        else:
            items.extend(to_text_blocks(item))
    return items


def wrap_handler(
    name: str,
    func: Callable[..., Any],
    normalize: Optional[Callable[[Any], list[Any]]] = None,
) -> Callable[..., Awaitable[list[Any]]]:
    """Stack the standard wrappers around a handler.

    Execution order: _error_handler -> _auto_response -> func
    """
    wrapped = _auto_response(func, normalize)
    wrapped = _error_handler(name, wrapped)
    # Preserve original signature for introspection
    wrapped.__signature__ = inspect.signature(func)  # type: ignore[attr-defined]
    return wrapped
