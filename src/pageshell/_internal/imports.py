"""``"package.module:attribute"`` import strings.

Used for lazily imported pages (``lazy("notes.pages:about")``) and for
the app argument of the CLI (``pageshell run notes.app:app``).
"""

import importlib
from typing import Any


def split_target(target: str, default_attr: str) -> tuple[str, str]:
    """Split *target* into module path and attribute.

    The attribute defaults to *default_attr* when the ``:attr`` part is
    missing or empty.
    """
    module_path, _, attr_name = target.partition(":")
    return module_path, attr_name or default_attr


def import_target(module_path: str, attr_name: str) -> Any:
    """Import *module_path* and return its *attr_name*.

    Raises ``ModuleNotFoundError`` or ``AttributeError`` unchanged.
    """
    module = importlib.import_module(module_path)
    return getattr(module, attr_name)
