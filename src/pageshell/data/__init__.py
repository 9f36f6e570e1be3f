"""Document database connection for pageshell apps.

A connection, not an engine: the store assembles the connection string
from the site configuration, connects once at startup, and hands out
collections. When the database is unreachable the app keeps serving;
each data operation fails on its own with ``DatabaseError``.

Usage::

    from pageshell.config import load_site_config
    from pageshell.data import DocumentStore

    store = DocumentStore.from_site_config(load_site_config("config.json"))
    app = App(store=store)

Requires ``motor``::

    pip install pageshell[data]
"""

from pageshell.data.store import ConnectionOptions, DocumentStore, build_connection_uri, get_store

__all__ = [
    "ConnectionOptions",
    "DocumentStore",
    "build_connection_uri",
    "get_store",
]
