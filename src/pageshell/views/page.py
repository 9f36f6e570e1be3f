"""Page composer: one boundary and one deferred loader per routed page.

Every routed page gets its own ``Boundary(Deferred(content))`` so a
failing page only replaces the outlet it renders into; the navigation
bar and footer live outside this subtree and keep rendering.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from kida.template import Markup

from pageshell._internal.types import Loader
from pageshell.views.boundary import Boundary
from pageshell.views.deferred import Deferred
from pageshell.views.elements import loading_card
from pageshell.views.result import Failure

PresentedState = Literal["loading", "error", "resolved"]


@dataclass(frozen=True, slots=True)
class ViewState:
    """Snapshot of a page's lifecycle.

    At most one of loading, error, and resolved content is presented;
    ``presented`` names which.
    """

    path: str
    error: Failure | None = None
    loading: bool = True

    @property
    def presented(self) -> PresentedState:
        if self.error is not None:
            return "error"
        if self.loading:
            return "loading"
        return "resolved"


class Page:
    """A composed page: the boundary, the deferred loader inside it, and its path."""

    __slots__ = ("boundary", "deferred", "path")

    def __init__(self, boundary: Boundary, deferred: Deferred, path: str) -> None:
        self.boundary = boundary
        self.deferred = deferred
        self.path = path

    @property
    def state(self) -> ViewState:
        error = self.boundary.failure or self.deferred.failure
        return ViewState(
            path=self.path,
            error=error,
            loading=error is None and self.deferred.pending,
        )

    async def resolve(self) -> None:
        await self.deferred.resolve()

    def render(self) -> Markup:
        return self.boundary.render()


def compose_page(
    loader: Loader,
    *,
    path: str = "/",
    props: Mapping[str, Any] | None = None,
    loading_title: str = "Loading...",
    error_title: str = "Something went wrong",
) -> Page:
    """Wrap a page loader as ``Boundary(Deferred(loader, loading card))``."""
    deferred = Deferred(loader, loading_card(loading_title), props)
    boundary = Boundary(deferred, title=error_title)
    return Page(boundary, deferred, path)
