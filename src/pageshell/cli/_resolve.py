"""Resolve the CLI's ``module:attribute`` argument to an App.

``pageshell run notes.app`` means ``notes.app:app``. The attribute may
also be a zero-argument factory returning the App.
"""

from pageshell._internal.imports import import_target, split_target
from pageshell.app import App


def resolve_app(import_string: str) -> App:
    """Import the App named by *import_string*.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the module has no such attribute.
        TypeError: If the attribute is neither an ``App`` nor a factory
            that returns one, or the factory raises.
    """
    module_path, attr_name = split_target(import_string, "app")
    obj = import_target(module_path, attr_name)

    if isinstance(obj, App):
        return obj
    if not callable(obj):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a pageshell.App instance"
        raise TypeError(msg)

    try:
        app = obj()
    except Exception as exc:
        msg = f"App factory {import_string!r} raised an error: {exc}"
        raise TypeError(msg) from exc
    if not isinstance(app, App):
        msg = f"App factory {import_string!r} returned {type(app).__name__}, not a pageshell.App instance"
        raise TypeError(msg)
    return app
