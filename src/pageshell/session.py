"""Session/user record as seen by the view layer.

The record is owned by the API collaborator; views only read it. An
empty record (no identity) means the visitor is anonymous.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class SessionUser:
    """The current visitor.

    ``identity`` is the user payload returned by the API (id, username,
    email, ...). ``authenticated`` is False for the empty record.
    """

    identity: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    authenticated: bool = False

    @classmethod
    def from_payload(cls, payload: Any) -> SessionUser:
        """Build a record from a decoded API payload; anything empty is anonymous."""
        if not payload or not isinstance(payload, Mapping):
            return ANONYMOUS
        return cls(identity=MappingProxyType(dict(payload)), authenticated=True)

    @property
    def display_name(self) -> str:
        for key in ("username", "name", "email"):
            value = self.identity.get(key)
            if value:
                return str(value)
        return ""


ANONYMOUS = SessionUser()


@runtime_checkable
class SessionApi(Protocol):
    """What the shell needs from the API collaborator."""

    async def get_current_user(self) -> SessionUser: ...

    async def logout_current_user(self) -> None: ...
