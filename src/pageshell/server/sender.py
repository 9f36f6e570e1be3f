"""Writing pageshell responses to an ASGI ``send`` callable.

A plain ``Response`` goes out as one start message and one body message
with a ``content-length``. A ``StreamingResponse`` (a navigation: shell
first, settled outlet second) goes out chunk by chunk and is always
closed with an empty final body, even when a chunk fails to render.
"""

import html
import logging
import traceback
from collections.abc import AsyncIterator, Iterable

from pageshell._internal.types import Send
from pageshell.http.response import Response, StreamingResponse

logger = logging.getLogger("pageshell.server")

# 1xx, 204 and 304 responses never carry a body
_NO_BODY_STATUSES = frozenset({204, 304})


def _body_allowed(status: int) -> bool:
    return status >= 200 and status not in _NO_BODY_STATUSES


def _encode_headers(
    content_type: str,
    headers: Iterable[tuple[str, str]],
    *extra: tuple[bytes, bytes],
) -> list[tuple[bytes, bytes]]:
    raw = [(b"content-type", content_type.encode("latin-1")), *extra]
    raw.extend((name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in headers)
    return raw


def _start(status: int, headers: list[tuple[bytes, bytes]]) -> dict[str, object]:
    return {"type": "http.response.start", "status": status, "headers": headers}


def _body(data: bytes, *, more: bool) -> dict[str, object]:
    return {"type": "http.response.body", "body": data, "more_body": more}


async def _aiter(chunks: Iterable[str] | AsyncIterator[str]) -> AsyncIterator[str]:
    if isinstance(chunks, AsyncIterator):
        async for chunk in chunks:
            yield chunk
    else:
        for chunk in chunks:
            yield chunk


def _error_chunk(*, debug: bool) -> bytes:
    """Marker sent in place of a chunk that failed to render."""
    if not debug:
        return b"<!-- pageshell: render error -->"
    return (
        '<div class="pageshell-error" data-status="500" '
        'style="white-space:pre-wrap;font-family:monospace">'
        f"{html.escape(traceback.format_exc())}</div>"
    ).encode("utf-8")


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Send *response* in one body message. ``head`` keeps the headers, drops the body."""
    body = response.body_bytes if _body_allowed(response.status) else b""
    headers = _encode_headers(
        response.content_type,
        response.headers,
        (b"content-length", str(len(body)).encode("latin-1")),
    )
    await send(_start(response.status, headers))
    await send(_body(b"" if head else body, more=False))


async def send_streaming_response(
    response: StreamingResponse,
    send: Send,
    *,
    debug: bool = False,
) -> None:
    """Send *response* with chunked transfer encoding.

    Empty chunks are skipped. A chunk that raises is logged and replaced
    by a marker (the escaped traceback when *debug*), then the stream is
    closed normally.
    """
    headers = _encode_headers(
        response.content_type,
        response.headers,
        (b"transfer-encoding", b"chunked"),
    )
    await send(_start(response.status, headers))

    try:
        async for chunk in _aiter(response.chunks):
            if chunk:
                data = chunk.encode("utf-8") if isinstance(chunk, str) else chunk
                await send(_body(data, more=True))
    except Exception:
        logger.exception("Error while streaming response")
        await send(_body(_error_chunk(debug=debug), more=True))

    await send(_body(b"", more=False))
