"""Routing: ordered route entries and the navigation state machine.

Route entries are registered during setup and compiled into an
immutable, ordered table when the app freezes. The first entry whose
pattern matches a path wins.
"""

from pageshell.routing.navigator import Navigator
from pageshell.routing.route import PathSegment, RouteEntry, RouteMatch
from pageshell.routing.router import Router, parse_path

__all__ = [
    "Navigator",
    "PathSegment",
    "RouteEntry",
    "RouteMatch",
    "Router",
    "parse_path",
]
