"""Route table records: parsed path segments, entries, and matches."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pageshell._internal.types import Loader


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One ``/``-separated piece of a route pattern.

    A literal segment carries only its text. A placeholder such as
    ``{id:int}`` also carries the captured name and converter name.
    """

    value: str
    param_name: str | None = None
    param_type: str = "str"

    @classmethod
    def placeholder(cls, value: str) -> PathSegment:
        """Build a segment from ``{name}`` or ``{name:converter}``."""
        name, _, converter = value[1:-1].partition(":")
        return cls(value=value, param_name=name, param_type=converter or "str")

    @property
    def is_param(self) -> bool:
        return self.param_name is not None


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A path pattern and the loader of the page routed there.

    A non-exact entry also claims everything nested below its pattern:
    ``/docs`` with ``exact=False`` answers ``/docs/intro`` too.
    """

    path: str
    loader: Loader
    exact: bool = True
    name: str | None = None

    @property
    def match_kind(self) -> str:
        return "exact" if self.exact else "prefix"

    @property
    def page_label(self) -> str:
        """Loader name, with the entry name in parentheses when set."""
        label = getattr(self.loader, "__name__", repr(self.loader))
        return f"{label} ({self.name})" if self.name else label


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """The entry a path resolved to, plus what its placeholders captured.

    ``path_params`` keeps the raw strings from the URL; ``props`` holds
    the converted values handed to the page as keyword arguments.
    """

    entry: RouteEntry
    path_params: dict[str, str]
    props: dict[str, Any] = field(default_factory=dict)

    @property
    def loader(self) -> Loader:
        return self.entry.loader
