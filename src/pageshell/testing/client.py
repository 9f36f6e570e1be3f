"""In-process test client for pageshell apps.

Requests go straight into the ASGI callable; responses come back as the
production ``Response`` type, or as a ``StreamedResponse`` when the
caller wants to see how a navigation was chunked.
"""

from dataclasses import dataclass, field
from typing import Any

from pageshell.app import App
from pageshell.http.response import HTML, Response

type RawHeaders = list[tuple[bytes, bytes]]


def _decode_headers(raw: RawHeaders) -> tuple[tuple[str, str], ...]:
    return tuple((name.decode("latin-1"), value.decode("latin-1")) for name, value in raw)


def _build_scope(method: str, target: str, headers: dict[str, str] | None) -> dict[str, Any]:
    path, _, query = target.partition("?")
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method.upper(),
        "scheme": "http",
        "path": path,
        "raw_path": path.encode("latin-1"),
        "query_string": query.encode("latin-1"),
        "root_path": "",
        "headers": [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ],
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 0),
    }


@dataclass(slots=True)
class _Exchange:
    """Feeds one request body to the app and records what it sends back."""

    body: bytes = b""
    status: int = 200
    headers: RawHeaders = field(default_factory=list)
    parts: list[bytes] = field(default_factory=list)
    _delivered: bool = False

    async def receive(self) -> dict[str, Any]:
        if self._delivered:
            return {"type": "http.disconnect"}
        self._delivered = True
        return {"type": "http.request", "body": self.body, "more_body": False}

    async def send(self, message: dict[str, Any]) -> None:
        match message["type"]:
            case "http.response.start":
                self.status = message["status"]
                self.headers = list(message.get("headers", []))
            case "http.response.body":
                self.parts.append(message.get("body", b""))


@dataclass(frozen=True, slots=True)
class StreamedResponse:
    """A response whose body messages are kept in the order they arrived.

    Empty body messages (the closing one, for instance) are dropped.
    """

    status: int
    headers: tuple[tuple[str, str], ...]
    chunks: tuple[str, ...]

    @property
    def text(self) -> str:
        return "".join(self.chunks)

    def header(self, name: str) -> str | None:
        wanted = name.lower()
        return next((value for key, value in self.headers if key == wanted), None)


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Drives a pageshell app without a server.

    The ``async with`` block brackets the app's startup and shutdown, so
    the document store and lifecycle hooks behave as under a real
    lifespan.

    Usage::

        async with TestClient(app) as client:
            page = await client.get("/")
            streamed = await client.stream("/about")
    """

    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    async def __aenter__(self) -> TestClient:
        await self.app.startup()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.app.shutdown()

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("GET", path, headers=headers)

    async def head(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("HEAD", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        return await self.request("POST", path, headers=headers, body=body)

    async def fragment(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Navigate the way htmx does: ``HX-Request`` set, outlet only."""
        return await self.request("GET", path, headers={"HX-Request": "true", **(headers or {})})

    async def stream(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> StreamedResponse:
        """GET *path*, keeping each body message as a separate chunk."""
        exchange = await self._exchange("GET", path, headers=headers)
        return StreamedResponse(
            status=exchange.status,
            headers=_decode_headers(exchange.headers),
            chunks=tuple(part.decode("utf-8") for part in exchange.parts if part),
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send any request and collect the whole body into a ``Response``."""
        exchange = await self._exchange(method, path, headers=headers, body=body)

        content_type = HTML
        kept: list[tuple[str, str]] = []
        for name, value in _decode_headers(exchange.headers):
            if name == "content-type":
                content_type = value
            elif name != "content-length":
                kept.append((name, value))

        return Response(
            body=b"".join(exchange.parts),
            status=exchange.status,
            content_type=content_type,
            headers=tuple(kept),
        )

    async def _exchange(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None,
        body: bytes | None = None,
    ) -> _Exchange:
        exchange = _Exchange(body=body or b"")
        await self.app(_build_scope(method, path, headers), exchange.receive, exchange.send)
        return exchange
