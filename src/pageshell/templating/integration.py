"""Kida environment setup for the page shell.

Creates a kida Environment from AppConfig. The environment is created
once during ``App._freeze()`` and shared by every request.

Template lookup order: the app's ``template_dir`` (if configured), then
pageshell's built-in templates. An app overrides the layout by shipping
its own ``pageshell/shell.html``.
"""

from collections.abc import Mapping
from typing import Any

from kida import ChoiceLoader, Environment, FileSystemLoader, PackageLoader

from pageshell.config import AppConfig

SHELL_TEMPLATE = "pageshell/shell.html"


def create_environment(config: AppConfig) -> Environment:
    """Create a kida Environment from app configuration."""
    loaders: list[Any] = []
    if config.template_dir is not None:
        loaders.append(FileSystemLoader(str(config.template_dir)))
    loaders.append(PackageLoader("pageshell.templating", "templates"))

    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=config.autoescape,
        auto_reload=config.debug,
    )


def render_shell(env: Environment, context: Mapping[str, Any]) -> str:
    """Render the full page shell."""
    template = env.get_template(SHELL_TEMPLATE)
    return template.render(dict(context))
