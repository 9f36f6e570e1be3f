"""Calling user callables that may be sync or async.

Page loaders and lifecycle hooks can be ``def`` or ``async def``; the
sync/async check lives here and nowhere else.
"""

import inspect
from collections.abc import Iterable
from typing import Any

from pageshell._internal.types import Hook


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func*, awaiting the result when it is awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


async def run_hooks(hooks: Iterable[Hook]) -> None:
    """Run lifecycle hooks one after another, in registration order.

    A failing hook stops the sequence; its exception propagates to the
    lifespan handler.
    """
    for hook in hooks:
        await invoke(hook)
