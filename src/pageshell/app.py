"""pageshell application class.

Mutable during setup (page registration, lifecycle hooks).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

from kida import Environment

from pageshell._internal.invoke import run_hooks
from pageshell._internal.types import Component, Hook, Loader, Receive, Scope, Send
from pageshell.api.client import ApiClient
from pageshell.config import AppConfig
from pageshell.http.request import Request
from pageshell.routing.navigator import Navigator
from pageshell.routing.route import RouteEntry
from pageshell.routing.router import Router
from pageshell.server.handler import handle_request
from pageshell.session import SessionApi
from pageshell.shell import Shell
from pageshell.templating.integration import create_environment
from pageshell.views.deferred import lazy

if TYPE_CHECKING:
    from pageshell.data.store import DocumentStore


def _resolved(component: Component) -> Loader:
    """A loader for a component that is already imported."""

    async def load() -> Component:
        return component

    load.__name__ = getattr(component, "__name__", "page")
    load.__qualname__ = load.__name__
    return load


class App:
    """The pageshell application.

    Mutable during setup (page registration, hooks).
    Frozen at runtime when ``app.run()`` or ``__call__()`` is first invoked.

    Usage::

        app = App(AppConfig(site_title="Notes"), api=ApiClient("https://api.example.com"))

        @app.page("/")
        def landing() -> str:
            return card("Welcome", "Pick a page from the menu.")

        app.lazy_page("/about", "notes.pages.about")
        app.run()

    Thread safety:
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the route table, even when several ASGI workers
        call ``__call__()`` concurrently on first request.
    """

    __slots__ = (
        "_api",
        "_custom_kida_env",
        "_freeze_lock",
        "_frozen",
        "_kida_env",
        "_pending_entries",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "_store",
        "config",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        api: SessionApi | str | None = None,
        store: DocumentStore | None = None,
        kida_env: Environment | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_entries: list[RouteEntry] = []
        self._startup_hooks: list[Hook] = []
        self._shutdown_hooks: list[Hook] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()
        self._custom_kida_env: Environment | None = kida_env

        # API collaborator: any SessionApi, or a base URL string for ApiClient.
        # Falls back to config.api_base_url when not given.
        base_url = api if isinstance(api, str) else None
        if api is None:
            base_url = self.config.api_base_url
        if base_url is not None:
            self._api: SessionApi | None = ApiClient(base_url, timeout=self.config.api_timeout)
        else:
            self._api = api if not isinstance(api, str) else None

        # Document store: connected at startup, disconnected at shutdown.
        self._store: DocumentStore | None = store

        # Compiled state, set during _freeze()
        self._router: Router | None = None
        self._kida_env: Environment | None = None

    # -- Page registration --

    def add_page(
        self,
        path: str,
        loader: Loader,
        *,
        exact: bool = True,
        name: str | None = None,
    ) -> None:
        """Register a page loader for *path*.

        Entries are matched in registration order; the first match wins.

        Args:
            path: URL path pattern. Use ``{param}`` for path parameters;
                captured values are passed to the page as keyword props.
            loader: Sync or async callable returning the page component.
            exact: If False, also match every path nested below *path*.
            name: Optional entry name (shown by ``pageshell routes``).
        """
        self._check_not_frozen()
        self._pending_entries.append(RouteEntry(path=path, loader=loader, exact=exact, name=name))

    def page(
        self,
        path: str,
        *,
        exact: bool = True,
        name: str | None = None,
    ) -> Callable[[Component], Component]:
        """Register an already-imported page component via decorator."""

        def decorator(func: Component) -> Component:
            self.add_page(path, _resolved(func), exact=exact, name=name)
            return func

        return decorator

    def lazy_page(
        self,
        path: str,
        target: str,
        *,
        exact: bool = True,
        name: str | None = None,
    ) -> None:
        """Register a page whose module is imported on first navigation.

        *target* is ``"package.module"`` (component named ``page``) or
        ``"package.module:attribute"``.
        """
        self.add_page(path, lazy(target), exact=exact, name=name)

    # -- Collaborators --

    @property
    def api(self) -> SessionApi | None:
        """The API collaborator, if configured."""
        return self._api

    @property
    def store(self) -> DocumentStore:
        """The document store.

        Raises ``RuntimeError`` if no store was configured on this app.
        """
        if self._store is None:
            msg = "No document store configured. Pass store= to App()."
            raise RuntimeError(msg)
        return self._store

    @property
    def routes(self) -> list[RouteEntry]:
        """Registered entries in registration order (freezes the app)."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router.routes

    # -- Lifecycle hooks --

    def on_startup(self, func: Hook) -> Hook:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        after the document store connects.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Hook) -> Hook:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Shell --

    def create_shell(self, request: Request | None = None) -> Shell:
        """A fresh shell for one visitor.

        When the API collaborator is an ``ApiClient``, it is bound to the
        request's credential headers so the API sees the visitor's token.
        """
        self._ensure_frozen()
        assert self._router is not None
        assert self._kida_env is not None

        api = self._api
        if request is not None and isinstance(api, ApiClient):
            api = api.bind(request.credentials)

        navigator = Navigator(
            self._router,
            loading_title=self.config.loading_title,
            error_title=self.config.error_title,
            not_found_title=self.config.not_found_title,
            not_found_detail=self.config.not_found_detail,
        )
        return Shell(navigator, self._kida_env, self.config, api=api)

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start the server; reloads on file changes when ``config.debug`` is set."""
        self._ensure_frozen()

        from pageshell.server.serve import run_server

        run_server(self, host=host, port=port)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self._ensure_frozen()

        await handle_request(
            scope,
            receive,
            send,
            shell_factory=self.create_shell,
            config=self.config,
        )

    async def startup(self) -> None:
        """Connect the store and run startup hooks.

        A store that cannot connect is logged by the store and left
        disconnected; startup continues.
        """
        self._ensure_frozen()
        if self._store is not None:
            from pageshell.data.store import _store_var

            await self._store.connect()
            _store_var.set(self._store)

        await run_hooks(self._startup_hooks)

    async def shutdown(self) -> None:
        """Run shutdown hooks, then release collaborators."""
        await run_hooks(self._shutdown_hooks)

        aclose = getattr(self._api, "aclose", None)
        if aclose is not None:
            await aclose()
        if self._store is not None:
            await self._store.disconnect()

    async def _handle_lifespan(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                    await send({"type": "lifespan.startup.complete"})
                except Exception as exc:
                    await send(
                        {
                            "type": "lifespan.startup.failed",
                            "message": str(exc),
                        }
                    )
                    return

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        router = Router()
        for entry in self._pending_entries:
            router.add(entry)
        router.compile()
        self._router = router

        if self._custom_kida_env is not None:
            self._kida_env = self._custom_kida_env
        else:
            self._kida_env = create_environment(self.config)

        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register pages and hooks before calling app.run()."
            )
            raise RuntimeError(msg)

