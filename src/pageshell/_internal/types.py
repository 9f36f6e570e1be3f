"""Shared type aliases used across pageshell modules.

The ASGI aliases are internal: pages and hooks see ``Request`` and
``Response``, never raw scopes.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any, TypeAlias

# Raw ASGI 3.0 callables
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]

# Page component: plain function from keyword props to markup
Component: TypeAlias = Callable[..., Any]

# Page loader: resolves a component, sync or async
Loader: TypeAlias = Callable[[], Component | Awaitable[Component]]

# Lifecycle hook: startup/shutdown, sync or async
Hook: TypeAlias = Callable[[], Any]
