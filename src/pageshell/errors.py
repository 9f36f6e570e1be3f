"""pageshell exception hierarchy.

Shared across the router, views, shell, and collaborators so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class PageshellError(Exception):
    """Base for all pageshell-specific errors."""


class ConfigurationError(PageshellError):
    """Raised when app or site configuration is invalid.

    Typically raised while loading ``config.json`` or during
    ``App._freeze()`` at startup.
    """


class LoadError(PageshellError):
    """Raised when a deferred page loader cannot produce a component.

    Never reaches the caller of ``Navigator.settle()``: the deferred
    loader turns it into a ``Failure`` that the page boundary renders.
    """


@dataclass(frozen=True, slots=True)
class ApiError(PageshellError):
    """A failed call to the remote API.

    ``status`` is the HTTP status code, or ``None`` when the request
    never produced a response (connection refused, timeout).
    """

    status: int | None = None
    detail: str = ""

    def __str__(self) -> str:
        if self.status is None:
            return self.detail or "API unreachable"
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class DatabaseError(PageshellError):
    """Raised by a data operation when no database connection is available."""


class DriverNotInstalledError(DatabaseError):
    """Raised when the document database driver (motor) is not installed."""
