"""Navigator: the routing state machine behind the page outlet.

States are *no-match* and *matched(entry)*. Each ``navigate(path)``
discards the previous page and either composes a fresh page for the
first matching entry or selects the not-found card. Not-found is a
normal outcome, never an exception.

Navigations are applied in the order they are dispatched. Page
resolution is the only suspension point; a resolution that finishes
after a newer navigation is dropped so stale content never shows::

    navigator.navigate("/about")
    task = asyncio.create_task(navigator.settle())
    navigator.navigate("/contact")   # the /about result is discarded
"""

import logging
from typing import Literal

from kida.template import Markup

from pageshell.routing.route import RouteMatch
from pageshell.routing.router import Router
from pageshell.views.elements import not_found_card
from pageshell.views.page import Page, ViewState, compose_page
from pageshell.views.result import Failure

logger = logging.getLogger("pageshell.navigator")

NavigatorState = Literal["no-match", "matched"]


class Navigator:
    """Maps navigation events to composed pages."""

    __slots__ = (
        "_error_title",
        "_generation",
        "_loading_title",
        "_match",
        "_not_found",
        "_page",
        "_path",
        "_router",
    )

    def __init__(
        self,
        router: Router,
        *,
        loading_title: str = "Loading...",
        error_title: str = "Something went wrong",
        not_found_title: str = "404 - Not Found",
        not_found_detail: str | None = "The page you are looking for does not exist.",
    ) -> None:
        self._router = router
        self._loading_title = loading_title
        self._error_title = error_title
        self._not_found = not_found_card(not_found_title, not_found_detail)
        self._generation = 0
        self._path: str | None = None
        self._match: RouteMatch | None = None
        self._page: Page | None = None

    # -- Introspection --

    @property
    def state(self) -> NavigatorState:
        return "matched" if self._match is not None else "no-match"

    @property
    def current_path(self) -> str | None:
        return self._path

    @property
    def match(self) -> RouteMatch | None:
        return self._match

    @property
    def page(self) -> Page | None:
        """The active page, or None in the no-match state."""
        return self._page

    @property
    def generation(self) -> int:
        """Number of navigations processed so far."""
        return self._generation

    @property
    def view_state(self) -> ViewState | None:
        return self._page.state if self._page is not None else None

    # -- Transitions --

    def navigate(self, path: str) -> RouteMatch | None:
        """Process a navigation event to *path*.

        The previous page and its view state are dropped, not merged.
        Returns the match, or None when the not-found card is selected.
        """
        self._generation += 1
        self._path = path
        self._page = None
        self._match = self._router.match(path)

        if self._match is None:
            logger.debug("No route matches %r; showing not-found", path)
            return None

        entry = self._match.entry
        logger.debug("Navigated to %r (route %r)", path, entry.path)
        self._page = compose_page(
            entry.loader,
            path=path,
            props=self._match.props,
            loading_title=self._loading_title,
            error_title=self._error_title,
        )
        return self._match

    async def settle(self) -> None:
        """Resolve the active page unless a newer navigation supersedes it."""
        page = self._page
        if page is None or not page.deferred.pending:
            return
        generation = self._generation

        outcome = await page.deferred.fetch()

        if generation != self._generation or page is not self._page:
            logger.debug(
                "Discarding stale resolution for %r (navigation %d superseded by %d)",
                page.path,
                generation,
                self._generation,
            )
            return
        page.deferred.apply(outcome)

    def report(self, exc: BaseException) -> bool:
        """Funnel a failure raised outside rendering into the active page's boundary.

        For asynchronous callbacks (button handlers, background refreshes)
        that want their failure shown in place of the page. Returns False
        when there is no active page to show it in; the failure is then
        only logged.
        """
        if self._page is None:
            logger.error("Failure reported with no active page: %s", exc, exc_info=exc)
            return False
        self._page.boundary.capture(Failure.from_exception(exc, kind="render"))
        return True

    # -- Rendering --

    def render_outlet(self) -> Markup:
        """Markup for the page outlet: the active page, or the not-found card."""
        if self._page is None:
            return self._not_found
        return self._page.render()
