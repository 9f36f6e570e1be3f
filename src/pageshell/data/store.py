"""MongoDB connection via motor.

Connection string::

    mongodb+srv://{username}:{password}@{db.URI}

``db.URI`` may carry its own scheme (``mongodb://host:27017/app``);
credentials are URL-quoted and inserted after it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote_plus

from pageshell.config import SiteConfig
from pageshell.errors import DatabaseError, DriverNotInstalledError

logger = logging.getLogger("pageshell.data")

DEFAULT_SCHEME = "mongodb+srv"
DEFAULT_CONNECT_TIMEOUT_MS = 30_000

# App-level store accessor (set by App during lifespan startup).
_store_var: ContextVar[DocumentStore] = ContextVar("pageshell_store")


def get_store() -> DocumentStore:
    """Return the app-level document store.

    Raises ``LookupError`` if no store is configured or the app has not
    started yet.
    """
    return _store_var.get()


def build_connection_uri(uri: str, username: str = "", password: str = "") -> str:
    """Assemble a connection string from the host/URI and credentials."""
    scheme, sep, rest = uri.partition("://")
    if not sep:
        scheme, rest = DEFAULT_SCHEME, uri
    # Drop credentials already embedded in the URI; the config's win
    if "@" in rest.split("/", 1)[0]:
        rest = rest.split("@", 1)[1]
    if not username:
        return f"{scheme}://{rest}"
    return f"{scheme}://{quote_plus(username)}:{quote_plus(password)}@{rest}"


def _redact(uri: str) -> str:
    """Hide credentials for logging."""
    scheme, sep, rest = uri.partition("://")
    authority = rest.split("/", 1)[0]
    if "@" not in authority:
        return uri
    return f"{scheme}{sep}***@{rest.split('@', 1)[1]}"


@dataclass(frozen=True, slots=True)
class ConnectionOptions:
    """Connection options.

    ``family`` restricts name resolution to IPv4 (4) or IPv6 (6);
    0 allows both. ``keep_alive`` enables TCP keep-alive, which the
    driver always does, so it only documents intent; turning it off is
    rejected. ``connect_timeout_ms`` bounds both the socket connect and
    server selection.
    """

    family: int = 4
    keep_alive: bool = True
    connect_timeout_ms: int = DEFAULT_CONNECT_TIMEOUT_MS

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for the driver's client constructor."""
        if self.family not in (0, 4, 6):
            msg = f"Unsupported address family {self.family}; use 4, 6, or 0"
            raise DatabaseError(msg)
        if not self.keep_alive:
            msg = "The MongoDB driver always uses TCP keep-alive; keep_alive=False is not supported"
            raise DatabaseError(msg)
        return {
            "connectTimeoutMS": self.connect_timeout_ms,
            "serverSelectionTimeoutMS": self.connect_timeout_ms,
        }


def _motor_client_factory() -> Callable[..., Any]:
    try:
        from motor.motor_asyncio import AsyncIOMotorClient
    except ImportError:
        msg = (
            "pageshell.data requires 'motor' for document storage. "
            "Install it with: pip install pageshell[data]"
        )
        raise DriverNotInstalledError(msg) from None
    return AsyncIOMotorClient


class DocumentStore:
    """Lazily connected MongoDB client.

    ``connect()`` never raises for connection problems: it logs them and
    leaves the store disconnected. ``collection()`` on a disconnected
    store raises ``DatabaseError`` so the failing operation, not the
    process, pays for the outage.
    """

    __slots__ = ("_client", "_client_factory", "_database", "_options", "_uri")

    def __init__(
        self,
        uri: str,
        *,
        database: str | None = None,
        options: ConnectionOptions | None = None,
        client_factory: Callable[..., Any] | None = None,
    ) -> None:
        self._uri = uri
        self._database = database
        self._options = options or ConnectionOptions()
        self._client_factory = client_factory
        self._client: Any = None

    @classmethod
    def from_site_config(
        cls,
        site: SiteConfig,
        *,
        database: str | None = None,
        options: ConnectionOptions | None = None,
        client_factory: Callable[..., Any] | None = None,
    ) -> DocumentStore:
        uri = build_connection_uri(site.db_uri, site.db_username, site.db_password)
        return cls(uri, database=database, options=options, client_factory=client_factory)

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def options(self) -> ConnectionOptions:
        return self._options

    @property
    def connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> bool:
        """Connect and ping the server. Returns False (and logs) on failure."""
        if self._client is not None:
            return True

        factory = self._client_factory or _motor_client_factory()
        from pymongo.errors import PyMongoError

        kwargs = self._options.client_kwargs()
        client: Any = None
        try:
            client = factory(self._uri, **kwargs)
            await client.admin.command("ping")
        except (PyMongoError, OSError) as exc:
            logger.error(
                "Could not connect to %s: %s. Continuing without a database.",
                _redact(self._uri),
                exc,
            )
            if client is not None:
                client.close()
            return False

        self._client = client
        logger.info(
            "Connected to %s (family=%d, connect timeout %d ms)",
            _redact(self._uri),
            self._options.family,
            self._options.connect_timeout_ms,
        )
        return True

    def collection(self, name: str, database: str | None = None) -> Any:
        """Return a collection handle. Raises ``DatabaseError`` when disconnected."""
        if self._client is None:
            msg = f"No database connection; cannot access collection {name!r}"
            raise DatabaseError(msg)
        db_name = database or self._database
        db = self._client[db_name] if db_name else self._client.get_default_database()
        return db[name]

    async def disconnect(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.info("Disconnected from %s", _redact(self._uri))
