"""API collaborator: reads and ends the visitor's session on the remote API.

Usage::

    from pageshell.api import ApiClient

    async with ApiClient("https://api.example.com") as api:
        user = await api.get_current_user()
"""

from pageshell.api.client import ApiClient

__all__ = ["ApiClient"]
