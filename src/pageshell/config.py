"""Application and site configuration.

AppConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.

SiteConfig holds the secrets read from ``config.json`` (database
credentials and the token secret). That file must stay out of version
control, so it is loaded separately and never baked into AppConfig.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pageshell.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000, site_title="Notes")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "info"

    # Reload (development mode, requires debug=True)
    reload_include: tuple[str, ...] = ()  # Extra extensions to watch (e.g. ".html", ".css")
    reload_dirs: tuple[str, ...] = ()  # Extra directories to watch alongside cwd

    # Templates
    template_dir: str | Path | None = None  # Overrides for pageshell/shell.html
    autoescape: bool = True

    # Shell
    site_title: str = "pageshell"
    footer_text: str = ""
    outlet_id: str = "page-outlet"
    logout_path: str = "/logout"

    # Fallback cards
    loading_title: str = "Loading..."
    error_title: str = "Something went wrong"
    not_found_title: str = "404 - Not Found"
    not_found_detail: str = "The page you are looking for does not exist."

    # API collaborator
    api_base_url: str | None = None
    api_timeout: float = 10.0


@dataclass(frozen=True, slots=True)
class SiteConfig:
    """Secrets loaded from the site's ``config.json``."""

    db_uri: str
    db_username: str
    db_password: str
    jwt_secret: str

    def __repr__(self) -> str:
        return f"SiteConfig(db_uri={self.db_uri!r}, db_username={self.db_username!r})"


# (config key, SiteConfig field)
_SITE_KEYS: tuple[tuple[str, str], ...] = (
    ("db.URI", "db_uri"),
    ("db.username", "db_username"),
    ("db.password", "db_password"),
    ("jwt.secret", "jwt_secret"),
)


def _lookup(data: Mapping[str, Any], dotted: str) -> Any:
    """Find *dotted* as a flat key first, then as a nested path."""
    if dotted in data:
        return data[dotted]
    node: Any = data
    for part in dotted.split("."):
        if not isinstance(node, Mapping) or part not in node:
            raise KeyError(dotted)
        node = node[part]
    return node


def site_config_from_mapping(data: Mapping[str, Any]) -> SiteConfig:
    """Build a SiteConfig from a flat (``"db.URI"``) or nested mapping.

    Raises ``ConfigurationError`` naming every missing key.
    """
    values: dict[str, str] = {}
    missing: list[str] = []
    for key, field_name in _SITE_KEYS:
        try:
            value = _lookup(data, key)
        except KeyError:
            missing.append(key)
            continue
        values[field_name] = str(value)

    if missing:
        msg = f"Site configuration is missing required keys: {', '.join(missing)}"
        raise ConfigurationError(msg)
    return SiteConfig(**values)


def load_site_config(path: str | Path = "config.json") -> SiteConfig:
    """Load site secrets from a JSON file.

    Accepts both layouts::

        {"db.URI": "...", "db.username": "...", ...}
        {"db": {"URI": "...", "username": "..."}, "jwt": {"secret": "..."}}
    """
    config_path = Path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        msg = f"Site configuration file not found: {config_path}"
        raise ConfigurationError(msg) from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        msg = f"Site configuration file {config_path} is not valid JSON: {exc}"
        raise ConfigurationError(msg) from exc

    if not isinstance(data, dict):
        msg = f"Site configuration file {config_path} must contain a JSON object"
        raise ConfigurationError(msg)
    return site_config_from_mapping(data)
