"""Thin httpx wrapper for the remote REST API's session endpoints.

Two calls:

- ``get_current_user()``: the visitor's user record, or the empty record
- ``logout_current_user()``: ends the visitor's session

The API authenticates with the visitor's token, so the app binds a
client to each request's credential headers (``bind()``) while sharing
one connection pool.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from pageshell.errors import ApiError
from pageshell.session import ANONYMOUS, SessionUser

logger = logging.getLogger("pageshell.api")

CURRENT_USER_PATH = "/api/users/current"
LOGOUT_PATH = "/api/users/logout"

# Statuses that mean "nobody is logged in", not "the call failed"
_ANONYMOUS_STATUSES = frozenset({204, 401, 404})


class ApiClient:
    """Session calls against the remote API.

    Usage::

        api = ApiClient("https://api.example.com", timeout=5.0)
        user = await api.bind({"authorization": "Bearer ..."}).get_current_user()
        await api.aclose()

    Transport failures and unexpected statuses raise ``ApiError``.
    """

    __slots__ = ("_client", "_credentials", "_current_user_path", "_logout_path", "_owns_client")

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
        current_user_path: str = CURRENT_USER_PATH,
        logout_path: str = LOGOUT_PATH,
    ) -> None:
        if client is None:
            if base_url is None:
                msg = "ApiClient needs a base_url or an httpx.AsyncClient"
                raise ValueError(msg)
            client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)
            self._owns_client = True
        else:
            self._owns_client = False
        self._client = client
        self._credentials: dict[str, str] = {}
        self._current_user_path = current_user_path
        self._logout_path = logout_path

    def bind(self, credentials: Mapping[str, str]) -> ApiClient:
        """A client sharing this connection pool that sends *credentials* on every call."""
        bound = ApiClient(
            client=self._client,
            current_user_path=self._current_user_path,
            logout_path=self._logout_path,
        )
        bound._credentials = dict(credentials)
        return bound

    async def get_current_user(self) -> SessionUser:
        """Fetch the visitor's record; anonymous visitors get the empty record."""
        response = await self._request("GET", self._current_user_path)
        if response.status_code in _ANONYMOUS_STATUSES or not response.content:
            return ANONYMOUS
        try:
            payload: Any = response.json()
        except ValueError as exc:
            # JSONDecodeError, or UnicodeDecodeError for a body that is not UTF-8
            msg = f"Current user response is not JSON: {exc}"
            raise ApiError(status=response.status_code, detail=msg) from exc
        # Some APIs wrap the record: {"user": {...}}
        if isinstance(payload, Mapping) and set(payload) == {"user"}:
            payload = payload["user"]
        return SessionUser.from_payload(payload)

    async def logout_current_user(self) -> None:
        """End the visitor's session."""
        await self._request("POST", self._logout_path)

    async def _request(self, method: str, path: str) -> httpx.Response:
        try:
            response = await self._client.request(method, path, headers=self._credentials)
        except httpx.HTTPError as exc:
            raise ApiError(detail=f"{method} {path} failed: {exc}") from exc

        logger.debug("%s %s -> %d", method, path, response.status_code)
        if response.is_error and response.status_code not in _ANONYMOUS_STATUSES:
            raise ApiError(status=response.status_code, detail=response.text[:200])
        return response

    async def aclose(self) -> None:
        """Close the connection pool if this client created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
