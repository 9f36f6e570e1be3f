"""ASGI handler: turns an HTTP request into a navigation.

The only component that touches raw ASGI directly besides the sender.
Each request gets a fresh shell: the visitor's session is loaded, the
request path is navigated, and the result is streamed back.

Endpoints:

- ``GET``/``HEAD`` any path: navigate (404 status for not-found, the
  not-found card is still a full page)
- ``POST {config.logout_path}``: log out, then redirect to ``/``
"""

import logging
from collections.abc import Callable

from pageshell._internal.types import Receive, Scope, Send
from pageshell.config import AppConfig
from pageshell.http.request import Request
from pageshell.http.response import PLAIN, Response, StreamingResponse, method_not_allowed, redirect
from pageshell.server.sender import send_response, send_streaming_response
from pageshell.shell import Shell
from pageshell.templating.streaming import render_navigation

logger = logging.getLogger("pageshell.server")

ShellFactory = Callable[[Request], Shell]


async def dispatch(
    request: Request,
    *,
    shell_factory: ShellFactory,
    config: AppConfig,
) -> Response | StreamingResponse:
    """Route a request to logout or to a navigation."""
    shell = shell_factory(request)

    if request.path == config.logout_path:
        if request.method != "POST":
            return method_not_allowed("POST")
        await shell.logout()
        return redirect("/")

    if request.method not in ("GET", "HEAD"):
        return method_not_allowed("GET", "HEAD")

    await shell.mount()
    match = shell.navigate(request.path)
    status = 200 if match is not None else 404

    if request.method == "HEAD":
        return Response(status=status)

    if request.is_fragment:
        # htmx swaps the outlet only: settle first, send one fragment
        await shell.navigator.settle()
        return Response(body=str(shell.render_outlet()), status=status)

    return StreamingResponse(render_navigation(shell), status=status)


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    shell_factory: ShellFactory,
    config: AppConfig,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    try:
        response = await dispatch(request, shell_factory=shell_factory, config=config)
    except Exception:
        logger.exception("500 %s %s", request.method, request.path)
        response = Response("Internal Server Error", status=500, content_type=PLAIN)

    if isinstance(response, StreamingResponse):
        await send_streaming_response(response, send, debug=config.debug)
    else:
        await send_response(response, send, head=request.method == "HEAD")
