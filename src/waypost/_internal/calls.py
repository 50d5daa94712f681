"""Calling user hooks.

Guards, resolvers, collection sources, and event listeners are all
user code that may be plain functions, ``async def`` functions, or
objects with a ``__call__`` of either kind.
"""

import inspect
from collections.abc import Awaitable, Callable
from typing import Any


async def call_hook[R](hook: Callable[..., R | Awaitable[R]], *args: Any) -> R:
    """Call *hook* with positional *args*, awaiting the result if needed."""
    outcome = hook(*args)
    if inspect.isawaitable(outcome):
        return await outcome
    return outcome


def hook_name(hook: object) -> str:
    """Human-readable name of a hook for log lines and rejection details.

    Functions report their qualified name; callable instances such as
    ``GuardedResolver`` report their class name.
    """
    name = getattr(hook, "__qualname__", None) or getattr(hook, "__name__", None)
    if isinstance(name, str):
        return name.rsplit(".<locals>.", 1)[-1]
    return type(hook).__name__
