"""View composition and fallback lifecycle.

Components, leaves first:

- display elements (``elements``): pure functions from data to markup
- ``Boundary``: contains render and load failures of its child
- ``Deferred``: shows a fallback until its component resolves
- ``compose_page``: ``Boundary(Deferred(page))`` for each routed page

Page components are plain functions::

    def about(**props) -> str:
        return card("About", "A page shell demo.")
"""

from pageshell.views.boundary import Boundary
from pageshell.views.deferred import Deferred, lazy
from pageshell.views.page import Page, ViewState, compose_page
from pageshell.views.result import Failure, Rendered, Result, build

__all__ = [
    "Boundary",
    "Deferred",
    "Failure",
    "Page",
    "Rendered",
    "Result",
    "ViewState",
    "build",
    "compose_page",
    "lazy",
]
