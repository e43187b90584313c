"""Central registry for tools, resources and prompts.

Capabilities register themselves at import time (via the @Tool, @Resource and
@Prompt decorators). The registry is sealed once startup registration is done;
after that it is read-only and the dispatcher only looks things up.

Names are unique within a category. Registering a duplicate is rejected with
DuplicateCapabilityError rather than silently replacing the earlier handler.
Resources are keyed by URI, which must be unique as well as their name.
"""
from dataclasses import dataclass
from typing import Any, Callable, Optional
import logging

from pydantic import BaseModel

from .invocation import ToolOutput
from .schemas import NoParams

logger = logging.getLogger(__name__)

TOOL = "tool"
RESOURCE = "resource"
PROMPT = "prompt"
CATEGORIES = (TOOL, RESOURCE, PROMPT)


# ------------------------------------------------------------------------------
# Errors
# ------------------------------------------------------------------------------
# CapabilityError and its subclasses are protocol-level: the transport adapter
# turns them into MCP errors instead of ordinary content.
# DuplicateCapabilityError / RegistrySealedError are programming errors raised
# during startup registration.
# ------------------------------------------------------------------------------
class CapabilityError(Exception):
    """Base class for protocol-level dispatch errors."""

    def __init__(self, message: str, **data: Any):
        super().__init__(message)
        self.message = message
        self.data = data


class UnknownCapabilityError(CapabilityError):
    def __init__(self, category: str, name: str):
        super().__init__(f"Unknown {category}: {name}", category=category, name=name)
        self.category = category
        self.name = name


class InvalidArgumentError(CapabilityError):
    """Raw arguments failed validation against the capability's params model.

    Attributes:
        violations: One dict per offending field with ``field``, ``message``
            and ``value`` keys.
    """

    def __init__(self, category: str, name: str, violations: list[dict[str, Any]]):
        details = "; ".join(f"{v['field']}: {v['message']} (got {v['value']!r})" for v in violations)
        super().__init__(
            f"Invalid arguments for {category} '{name}': {details}",
            category=category,
            name=name,
            violations=violations,
        )
        self.violations = violations


class DuplicateCapabilityError(ValueError):
    pass


class RegistrySealedError(RuntimeError):
    pass


@dataclass(frozen=True)
class Capability:
    """A registered, invocable unit of behavior.

    Attributes:
        category: One of TOOL, RESOURCE, PROMPT
        name: Unique name within the category
        description: Shown to clients
        handler: Wrapped async handler returning a list of TextBlock
        params: Pydantic model describing the input shape
        output: Output model (tools only)
        uri: Resource URI (resources only)
        mime_type: Resource MIME type (resources only)
        title: Optional human-readable display name
        original: The undecorated function, kept for introspection
    """

    category: str
    name: str
    description: str
    handler: Callable[..., Any]
    params: type[BaseModel]
    output: Optional[type[BaseModel]] = None
    uri: Optional[str] = None
    mime_type: Optional[str] = None
    title: Optional[str] = None
    original: Optional[Callable[..., Any]] = None

    @property
    def key(self) -> str:
        """Lookup key inside the category table."""
        return self.uri if self.category == RESOURCE and self.uri else self.name


# Key: category, Value: dict of lookup key -> Capability (insertion ordered)
_registry: dict[str, dict[str, Capability]] = {category: {} for category in CATEGORIES}
_sealed = False


def register_capability(capability: Capability) -> Capability:
    """Add a capability to its category table.

    Raises:
        ValueError: If the name is empty or the category unknown
        DuplicateCapabilityError: If the name (or resource URI) is taken
        RegistrySealedError: If called after seal()
    """
    if _sealed:
        raise RegistrySealedError(
            f"Registry is sealed; cannot register {capability.category} '{capability.name}'"
        )
    if capability.category not in _registry:
        raise ValueError(f"Unknown category: {capability.category}")
    if not capability.name or not capability.name.strip():
        raise ValueError(f"{capability.category.capitalize()} name must be non-empty")

    table = _registry[capability.category]
    if capability.category == RESOURCE:
        if not capability.uri:
            raise ValueError(f"Resource '{capability.name}' needs a URI")
        if capability.uri in table:
            raise DuplicateCapabilityError(f"Resource already registered: {capability.uri}")
        if capability.name in [c.name for c in table.values()]:
            raise DuplicateCapabilityError(f"Resource name already registered: {capability.name}")
    elif capability.name in table:
        raise DuplicateCapabilityError(
            f"{capability.category.capitalize()} already registered: {capability.name}"
        )

    table[capability.key] = capability
    logger.debug("Registered %s: %s", capability.category, capability.key)
    return capability


def register_tool(
    name: str,
    description: str,
    params: type[BaseModel],
    output: Optional[type[BaseModel]],
    handler: Callable[..., Any],
    *,
    title: Optional[str] = None,
    original: Optional[Callable[..., Any]] = None,
) -> Capability:
    """Register a tool. ``handler`` must already be wrapped (see handler_wrappers)."""
    return register_capability(Capability(
        category=TOOL,
        name=name,
        description=description,
        handler=handler,
        params=params,
        output=output or ToolOutput,
        title=title,
        original=original,
    ))


def register_resource(
    name: str,
    uri: str,
    description: str,
    mime_type: str,
    producer: Callable[..., Any],
    *,
    title: Optional[str] = None,
    original: Optional[Callable[..., Any]] = None,
) -> Capability:
    """Register a zero-argument resource producer under ``uri``."""
    return register_capability(Capability(
        category=RESOURCE,
        name=name,
        description=description,
        handler=producer,
        params=NoParams,
        uri=uri,
        mime_type=mime_type,
        title=title,
        original=original,
    ))


def register_prompt(
    name: str,
    description: str,
    params: type[BaseModel],
    generator: Callable[..., Any],
    *,
    title: Optional[str] = None,
    original: Optional[Callable[..., Any]] = None,
) -> Capability:
    """Register a prompt template generator."""
    return register_capability(Capability(
        category=PROMPT,
        name=name,
        description=description,
        handler=generator,
        params=params,
        title=title,
        original=original,
    ))


def get_capability(category: str, name: str) -> Capability:
    """Get a capability by name (URI for resources). Raises UnknownCapabilityError."""
    table = _registry.get(category)
    if table is None or name not in table:
        raise UnknownCapabilityError(category, name)
    return table[name]


def list_capabilities(category: str) -> list[Capability]:
    """All capabilities of a category in registration order."""
    return list(_registry.get(category, {}).values())


def seal() -> None:
    """Freeze the registry; further registration raises RegistrySealedError."""
    global _sealed
    if not _sealed:
        _sealed = True
        logger.info(
            "Registry sealed: %d tools, %d resources, %d prompts",
            len(_registry[TOOL]), len(_registry[RESOURCE]), len(_registry[PROMPT]),
        )


def is_sealed() -> bool:
    return _sealed
