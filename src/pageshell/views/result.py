"""Content-construction results.

Building a component never raises into the view tree. ``build()``
returns either ``Rendered`` markup or a ``Failure`` describing what
went wrong, and the enclosing ``Boundary`` decides what to show.
"""

from __future__ import annotations

import html
import inspect
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, TypeAlias

from kida.template import Markup

from pageshell._internal.types import Component

FailureKind: TypeAlias = Literal["render", "load"]


@dataclass(frozen=True, slots=True)
class Rendered:
    """Successfully built markup."""

    content: Markup


@dataclass(frozen=True, slots=True)
class Failure:
    """A failure captured while loading or rendering page content.

    ``description`` is what the visitor sees in the error card.
    ``exc`` keeps the original exception for the log; it does not take
    part in equality.
    """

    kind: FailureKind
    error_type: str
    description: str
    exc: BaseException | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_exception(cls, exc: BaseException, *, kind: FailureKind = "render") -> Failure:
        description = str(exc) or type(exc).__name__
        return cls(kind=kind, error_type=type(exc).__name__, description=description, exc=exc)


Result: TypeAlias = Rendered | Failure


def to_markup(value: Any) -> Markup:
    """Coerce a component's return value to markup.

    Components return trusted HTML: ``str`` is taken as-is, ``None``
    renders nothing, anything else is rendered with ``str()`` and escaped.
    """
    if value is None:
        return Markup("")
    if isinstance(value, Markup):
        return value
    if isinstance(value, str):
        return Markup(value)
    return Markup(html.escape(str(value)))


def build(component: Component, props: Mapping[str, Any] | None = None) -> Result:
    """Call *component* with *props* as keyword arguments.

    Any exception raised while building, including one raised while
    converting the return value to markup, becomes a ``render`` Failure.
    Rendering is synchronous, so a component that returns an awaitable
    (an ``async def`` page) is a render Failure too.
    """
    try:
        content = component(**(props or {}))
        if inspect.isawaitable(content):
            if inspect.iscoroutine(content):
                content.close()
            name = getattr(component, "__name__", repr(component))
            msg = f"Page component {name!r} is async; page components render synchronously"
            raise TypeError(msg)
        return Rendered(to_markup(content))
    except Exception as exc:
        return Failure.from_exception(exc, kind="render")
