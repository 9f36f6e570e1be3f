"""Boundary wrapper: contains failures of the subtree it wraps.

A boundary renders its child until the child reports a ``Failure``.
From then on it renders the error card for that failure for the rest
of its lifetime; a new navigation builds a new boundary. There is no
automatic retry.
"""

import logging
from typing import Protocol

from kida.template import Markup

from pageshell.views.elements import error_card
from pageshell.views.result import Failure, Rendered, Result

logger = logging.getLogger("pageshell.boundary")


class Renderable(Protocol):
    """Anything a boundary can wrap."""

    def render(self) -> Result: ...


class Boundary:
    """Wraps exactly one child and substitutes an error card on failure.

    Usage::

        boundary = Boundary(Deferred(loader, loading_card()))
        html = boundary.render()   # child's markup, or the error card
    """

    __slots__ = ("_child", "_failure", "_title")

    def __init__(self, child: Renderable, *, title: str = "Something went wrong") -> None:
        self._child = child
        self._failure: Failure | None = None
        self._title = title

    @property
    def failure(self) -> Failure | None:
        """The captured failure, or None while the child is healthy."""
        return self._failure

    @property
    def child(self) -> Renderable:
        return self._child

    def capture(self, failure: Failure) -> None:
        """Latch *failure*. Later failures are ignored; the first one stays on screen."""
        if self._failure is not None:
            logger.debug(
                "Boundary already holds a failure; ignoring %s: %s",
                failure.error_type,
                failure.description,
            )
            return
        self._failure = failure
        logger.error(
            "%s failure caught by boundary (%s): %s",
            failure.kind.capitalize(),
            failure.error_type,
            failure.description,
            exc_info=failure.exc,
        )

    def render(self) -> Markup:
        if self._failure is None:
            result = self._child.render()
            if isinstance(result, Rendered):
                return result.content
            self.capture(result)
        assert self._failure is not None
        return error_card(self._failure, self._title)
