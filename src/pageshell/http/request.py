"""Incoming requests, as the shell sees them.

A navigation only needs the method, the path, and a handful of headers
(``HX-Request`` and the visitor's credentials). No endpoint reads a
request body; logout is a bare POST.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from pageshell._internal.types import Scope

# Forwarded to the API collaborator so it sees the visitor's session
CREDENTIAL_HEADERS: tuple[str, ...] = ("authorization", "cookie")


def _header_map(raw: Iterable[tuple[bytes, bytes]]) -> Mapping[str, str]:
    """Lower-cased names; a repeated header keeps its first value."""
    headers: dict[str, str] = {}
    for name, value in raw:
        headers.setdefault(name.decode("latin-1").lower(), value.decode("latin-1"))
    return MappingProxyType(headers)


@dataclass(frozen=True, slots=True)
class Request:
    """Frozen request metadata."""

    method: str
    path: str
    headers: Mapping[str, str]

    @classmethod
    def from_asgi(cls, scope: Scope) -> Request:
        return cls(
            method=scope["method"],
            path=scope["path"] or "/",
            headers=_header_map(scope.get("headers", ())),
        )

    @property
    def is_fragment(self) -> bool:
        """htmx sets ``HX-Request`` when it swaps the outlet in place."""
        return self.headers.get("hx-request") == "true"

    @property
    def credentials(self) -> dict[str, str]:
        """Authorization and Cookie headers, when the visitor sent them."""
        return {name: self.headers[name] for name in CREDENTIAL_HEADERS if name in self.headers}
