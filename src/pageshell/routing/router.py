"""Ordered router with first-match-wins path matching.

Entries are registered during setup and compiled into an immutable
table when the app freezes. Matching walks the table in registration
order; the first entry whose pattern matches the path wins, so a broad
non-exact entry registered early shadows narrower ones after it.
"""

import re
from dataclasses import dataclass

from pageshell.errors import ConfigurationError
from pageshell.routing.params import CONVERTERS, convert_param
from pageshell.routing.route import PathSegment, RouteEntry, RouteMatch

_ANGLE_PARAM_RE = re.compile(r"<[^>]+>")


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"          -> [PathSegment("users")]
        "/users/{id}"     -> [PathSegment("users"), PathSegment("{id}", param_name="id")]
        "/users/{id:int}" -> [..., PathSegment("{id:int}", param_name="id", param_type="int")]

    Raises ``ConfigurationError`` for ``<param>`` placeholders and
    unknown converter names.
    """
    if _ANGLE_PARAM_RE.search(path):
        msg = (
            f"Route path {path!r} uses <param> placeholders. "
            "pageshell expects {param} (e.g. /users/{id})."
        )
        raise ConfigurationError(msg)

    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if not (part.startswith("{") and part.endswith("}")):
            segments.append(PathSegment(value=part))
            continue
        segment = PathSegment.placeholder(part)
        if not (segment.param_name or "").isidentifier():
            msg = f"Parameter name in {part!r} of route path {path!r} is not a valid identifier"
            raise ConfigurationError(msg)
        if segment.param_type not in CONVERTERS:
            msg = f"Unknown converter {segment.param_type!r} in route path {path!r}"
            raise ConfigurationError(msg)
        segments.append(segment)
    return segments


def normalize_path(path: str) -> str:
    """Collapse empty segments and the trailing slash: ``//a/b/`` -> ``/a/b``."""
    parts = [p for p in path.split("/") if p]
    return "/" + "/".join(parts)


@dataclass(frozen=True, slots=True)
class _CompiledEntry:
    """A route entry with its compiled pattern."""

    entry: RouteEntry
    regex: re.Pattern[str]
    param_types: dict[str, str]


def _compile_entry(entry: RouteEntry) -> _CompiledEntry:
    segments = parse_path(entry.path)
    pieces: list[str] = []
    param_types: dict[str, str] = {}

    for seg in segments:
        if not seg.is_param:
            pieces.append(re.escape(seg.value))
            continue
        name = seg.param_name
        if name in param_types:
            msg = f"Duplicate parameter {name!r} in route path {entry.path!r}"
            raise ConfigurationError(msg)
        converter = CONVERTERS[seg.param_type]
        pieces.append(f"(?P<{name}>{converter.pattern})")
        param_types[name] = seg.param_type
        if converter.greedy:
            break

    body = "/" + "/".join(pieces)
    if entry.exact:
        source = body
    elif pieces:
        source = f"{body}(?:/.*)?"
    else:
        source = r"/.*"
    return _CompiledEntry(entry=entry, regex=re.compile(source), param_types=param_types)


class Router:
    """Ordered route table.

    Usage::

        router = Router()
        router.add(RouteEntry("/", load_landing))
        router.add(RouteEntry("/users/{id:int}", load_user))
        router.compile()
        match = router.match("/users/42")   # RouteMatch or None
    """

    __slots__ = ("_compiled", "_entries")

    def __init__(self) -> None:
        self._entries: list[_CompiledEntry] = []
        self._compiled = False

    def add(self, entry: RouteEntry) -> None:
        """Append an entry. Must be called before compile().

        The pattern is compiled immediately so malformed paths fail at
        registration time.
        """
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        self._entries.append(_compile_entry(entry))

    @property
    def routes(self) -> list[RouteEntry]:
        """All registered entries, in registration order."""
        return [compiled.entry for compiled in self._entries]

    def compile(self) -> None:
        """Freeze the router. No more entries can be added."""
        self._compiled = True

    def match(self, path: str) -> RouteMatch | None:
        """Return the first entry matching *path*, or None.

        A miss is a normal outcome (the navigator renders the not-found
        card), so it is reported as ``None`` rather than raised.
        """
        target = normalize_path(path)
        for compiled in self._entries:
            found = compiled.regex.fullmatch(target)
            if found is None:
                continue
            params = {k: v for k, v in found.groupdict().items() if v is not None}
            props = {
                name: convert_param(value, compiled.param_types[name])
                for name, value in params.items()
            }
            return RouteMatch(entry=compiled.entry, path_params=params, props=props)
        return None
