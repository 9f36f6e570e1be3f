"""Application shell: navigation bar, page outlet, footer.

The shell owns one navigator and the visitor's session record. The nav
bar and footer are rendered outside every page's boundary, so a page
that fails to load or render only replaces the outlet.

Lifecycle::

    shell = Shell(navigator, env, config, api=api)
    await shell.mount()              # refresh the session record
    shell.navigate("/about")
    first = shell.render()           # loading card in the outlet
    await shell.navigator.settle()
    outlet = shell.render_outlet()   # resolved page or error card

API failures are handled here, at the call site: they are logged and
the visitor is treated as anonymous. They are not routed into the page
boundary (see ``Navigator.report`` for callers that want that).
"""

import logging

from kida import Environment
from kida.template import Markup

from pageshell.config import AppConfig
from pageshell.routing.navigator import Navigator
from pageshell.routing.route import RouteMatch
from pageshell.session import ANONYMOUS, SessionApi, SessionUser
from pageshell.templating.integration import render_shell
from pageshell.views.elements import footer, nav_action, nav_bar, nav_link

logger = logging.getLogger("pageshell.shell")


class Shell:
    """One visitor's view of the app."""

    __slots__ = ("_api", "_env", "_session", "config", "navigator")

    def __init__(
        self,
        navigator: Navigator,
        env: Environment,
        config: AppConfig,
        *,
        api: SessionApi | None = None,
    ) -> None:
        self.navigator = navigator
        self.config = config
        self._env = env
        self._api = api
        self._session: SessionUser = ANONYMOUS

    @property
    def session(self) -> SessionUser:
        return self._session

    # -- Session --

    async def mount(self) -> None:
        """Called once the shell is in place: load the session record."""
        await self.refresh_session()

    async def refresh_session(self) -> SessionUser:
        """Re-read the current user from the API; anonymous on failure."""
        if self._api is None:
            self._session = ANONYMOUS
            return self._session
        try:
            self._session = await self._api.get_current_user()
        except Exception:
            logger.exception("Could not load the current user; continuing as anonymous")
            self._session = ANONYMOUS
        return self._session

    async def logout(self) -> None:
        """End the session on the API, then refresh the navigation state."""
        if self._api is not None:
            try:
                await self._api.logout_current_user()
            except Exception:
                logger.exception("Logout request failed")
        await self.refresh_session()

    # -- Navigation --

    def navigate(self, path: str) -> RouteMatch | None:
        return self.navigator.navigate(path)

    def nav_links(self) -> list[Markup]:
        """Session-dependent links: Account/Logout when signed in, else Login/Signup."""
        current = self.navigator.current_path
        if self._session.authenticated:
            return [
                nav_link("/account", "Account", active=current == "/account"),
                nav_action(self.config.logout_path, "Logout"),
            ]
        return [
            nav_link("/login", "Login", active=current == "/login"),
            nav_link("/signup", "Signup", active=current == "/signup"),
        ]

    # -- Rendering --

    def render_outlet(self) -> Markup:
        return self.navigator.render_outlet()

    def render(self) -> str:
        """The full page: nav bar, outlet, footer."""
        outlet = self.render_outlet()
        state = self.navigator.view_state
        return render_shell(
            self._env,
            {
                "site_title": self.config.site_title,
                "nav": nav_bar(self.config.site_title, self.nav_links()),
                "outlet_id": self.config.outlet_id,
                "outlet": outlet,
                "view_state": state.presented if state is not None else "not-found",
                "footer": footer(self.config.footer_text),
                "user": self._session,
            },
        )
