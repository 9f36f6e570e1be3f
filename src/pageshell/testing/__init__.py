"""Test utilities for pageshell applications.

    from pageshell.testing import TestClient
"""

from pageshell.testing.client import StreamedResponse, TestClient

__all__ = ["StreamedResponse", "TestClient"]
