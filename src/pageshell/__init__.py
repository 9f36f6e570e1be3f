"""pageshell: routed pages inside a server-rendered application shell.

Every routed page renders inside its own error boundary and deferred
loader, so a page that is still loading or has failed only affects the
page outlet; the navigation bar and footer always render.

Basic usage::

    from pageshell import App
    from pageshell.views.elements import card

    app = App()

    @app.page("/")
    def landing() -> str:
        return card("Welcome", "Hello, World!")

    app.lazy_page("/about", "myapp.pages.about")   # imported on first visit

    app.run()
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "ApiClient",
    "ApiError",
    "App",
    "AppConfig",
    "ConfigurationError",
    "LoadError",
    "PageshellError",
    "SessionUser",
    "SiteConfig",
    "lazy",
    "load_site_config",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import pageshell`` fast while providing a clean top-level API.
    """
    if name == "App":
        from pageshell.app import App

        return App

    if name in ("AppConfig", "SiteConfig", "load_site_config"):
        from pageshell import config as _config

        return getattr(_config, name)

    if name == "ApiClient":
        from pageshell.api.client import ApiClient

        return ApiClient

    if name == "SessionUser":
        from pageshell.session import SessionUser

        return SessionUser

    if name == "lazy":
        from pageshell.views.deferred import lazy

        return lazy

    if name in ("ApiError", "ConfigurationError", "LoadError", "PageshellError"):
        from pageshell import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
