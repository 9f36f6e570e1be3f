"""Deferred loader: renders a fallback until its component resolves.

The component is fetched on demand through a loader (typically
``lazy("myapp.pages.about")``, which imports the module in a worker
thread). A failed fetch is not handled here: it becomes a ``load``
Failure returned from ``render()`` so the enclosing boundary shows it.

Resolution is split in two steps so the owner can discard stale work::

    outcome = await deferred.fetch()    # suspension point
    if still_current:
        deferred.apply(outcome)
"""

import importlib
from collections.abc import Mapping
from typing import Any

import anyio.to_thread
from kida.template import Markup

from pageshell._internal.imports import split_target
from pageshell._internal.invoke import invoke
from pageshell._internal.types import Component, Loader
from pageshell.errors import LoadError
from pageshell.views.result import Failure, Rendered, Result, build


def lazy(target: str, *, attr: str = "page") -> Loader:
    """Build a loader that imports ``"package.module:attr"`` on first use.

    The import runs in a worker thread so a slow import never blocks
    the event loop. *attr* is used when the target has no ``:attr`` part.
    Import errors propagate to the deferred loader, which reports them
    as a ``load`` failure.
    """
    module_path, attr_name = split_target(target, attr)

    async def load() -> Component:
        module = await anyio.to_thread.run_sync(importlib.import_module, module_path)
        component = getattr(module, attr_name, None)
        if component is None:
            msg = f"Module {module_path!r} has no page component {attr_name!r}"
            raise LoadError(msg)
        return component

    load.__name__ = f"lazy({module_path}:{attr_name})"
    load.__qualname__ = load.__name__
    return load


class Deferred:
    """Defers rendering of a component until its loader resolves."""

    __slots__ = ("_component", "_failure", "_fallback", "_loader", "_props")

    def __init__(
        self,
        loader: Loader,
        fallback: Markup,
        props: Mapping[str, Any] | None = None,
    ) -> None:
        self._loader = loader
        self._fallback = fallback
        self._props: dict[str, Any] = dict(props or {})
        self._component: Component | None = None
        self._failure: Failure | None = None

    @property
    def pending(self) -> bool:
        """True until the loader has produced a component or a failure."""
        return self._component is None and self._failure is None

    @property
    def failure(self) -> Failure | None:
        return self._failure

    @property
    def props(self) -> dict[str, Any]:
        return self._props

    async def fetch(self) -> Component | Failure:
        """Run the loader without touching this loader's state."""
        try:
            component = await invoke(self._loader)
        except Exception as exc:
            return Failure.from_exception(exc, kind="load")
        if not callable(component):
            exc = LoadError(f"Loader returned {type(component).__name__}, not a page component")
            return Failure.from_exception(exc, kind="load")
        return component

    def apply(self, outcome: Component | Failure) -> None:
        """Store a fetched outcome. Only the first outcome is kept."""
        if not self.pending:
            return
        if isinstance(outcome, Failure):
            self._failure = outcome
        else:
            self._component = outcome

    async def resolve(self) -> None:
        """Fetch and apply in one step."""
        self.apply(await self.fetch())

    def render(self) -> Result:
        if self._failure is not None:
            return self._failure
        if self._component is None:
            return Rendered(self._fallback)
        return build(self._component, self._props)
