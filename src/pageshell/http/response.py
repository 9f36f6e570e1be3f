"""Outgoing responses: a buffered page body or a streamed navigation.

Both kinds are frozen; ``with_header`` hands back a copy carrying one
more header.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from dataclasses import dataclass, replace
from typing import Self

HTML = "text/html; charset=utf-8"
PLAIN = "text/plain; charset=utf-8"

type Headers = tuple[tuple[str, str], ...]


class _Transformable:
    __slots__ = ()

    headers: Headers

    def with_header(self, name: str, value: str) -> Self:
        return replace(self, headers=(*self.headers, (name, value)))

    def header(self, name: str) -> str | None:
        """First value sent for header *name*, compared case-insensitively."""
        wanted = name.lower()
        return next((value for key, value in self.headers if key.lower() == wanted), None)


@dataclass(frozen=True, slots=True)
class Response(_Transformable):
    """A complete response, sent in a single body message."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = HTML
    headers: Headers = ()

    @property
    def body_bytes(self) -> bytes:
        body = self.body
        return body if isinstance(body, bytes) else body.encode("utf-8")

    @property
    def text(self) -> str:
        body = self.body
        return body if isinstance(body, str) else body.decode("utf-8")


@dataclass(frozen=True, slots=True)
class StreamingResponse(_Transformable):
    """A navigation sent as it settles.

    The first chunk is the shell with the loading card in its outlet;
    later chunks swap the resolved page (or its error card) in.
    """

    chunks: Iterator[str] | AsyncIterator[str]
    status: int = 200
    content_type: str = HTML
    headers: Headers = ()


def redirect(url: str, status: int = 303) -> Response:
    """Send the browser to *url*; 303 turns a POST into a GET."""
    return Response(status=status).with_header("Location", url)


def method_not_allowed(*allowed: str) -> Response:
    """405 naming the methods the path does accept."""
    return Response("Method Not Allowed", status=405, content_type=PLAIN).with_header(
        "Allow", ", ".join(allowed)
    )
