"""Shared pytest configuration for pageshell examples.

Provides the ``example_app`` fixture that loads a fresh App instance
from the ``app.py`` file in the same directory as the test.  Each call
re-executes app.py in an isolated module namespace, so every test starts
with clean state.
"""

import importlib.util
from pathlib import Path

import pytest


@pytest.fixture
def example_app(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch):
    """Load a fresh App from the sibling app.py next to the test file.

    The example directory is put on ``sys.path`` so lazily imported page
    modules next to app.py resolve as they do under ``python app.py``.
    """
    app_path = Path(request.path).parent / "app.py"
    monkeypatch.syspath_prepend(str(app_path.parent))
    module_name = f"example_{app_path.parent.name}"
    spec = importlib.util.spec_from_file_location(module_name, app_path)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.app
