"""Serving an App on pounce.

The server is built from the app's own ``AppConfig``; callers only
override the bind address and reload. Reload always runs a single
worker so the watcher owns the one process.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pageshell.app import App

logger = logging.getLogger("pageshell.server")


def run_server(
    app: App,
    *,
    host: str | None = None,
    port: int | None = None,
    reload: bool | None = None,
    app_path: str | None = None,
) -> None:
    """Serve *app* until interrupted.

    Args:
        app: The pageshell App (an ASGI callable).
        host: Bind address; defaults to ``app.config.host``.
        port: Bind port; defaults to ``app.config.port``.
        reload: Restart on file changes; defaults to ``app.config.debug``.
            Watches ``config.reload_dirs`` and ``config.reload_include``.
        app_path: ``"module:attribute"`` of *app*. With reload on, pounce
            re-imports it on every change so edits take effect; without
            it, reload restarts the same App object.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = app.config
    host = host or config.host
    port = port or config.port
    reload = config.debug if reload is None else reload
    server_config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
        reload_include=config.reload_include,
        reload_dirs=config.reload_dirs,
        log_level=config.log_level,
    )
    logger.info(
        "Serving %d page(s) on http://%s:%d%s",
        len(app.routes),
        host,
        port,
        " (reload)" if reload else "",
    )
    Server(server_config, app, app_path=app_path).run()
