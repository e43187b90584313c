# primitives/__init__.py
"""MCP primitives - tools, resources and prompts.

Importing the subpackages registers every capability with the handler
registry (the decorators run at import time).
"""
import importlib

_SUBPACKAGES = ("tools", "resources", "prompts")


def load_all() -> None:
    """Import every primitive module so its capabilities get registered.

    Safe to call more than once; modules are only imported (and registered)
    the first time.
    """
    for subpackage in _SUBPACKAGES:
        importlib.import_module(f".{subpackage}", __name__)


__all__ = ["load_all"]
