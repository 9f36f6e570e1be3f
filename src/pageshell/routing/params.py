"""Typed path parameters for route entries.

A segment like ``{id:int}`` names a converter. The converter supplies
the regex the segment compiles to and turns the captured text into the
prop value handed to the page component::

    /users/{id:int}      -> user(id=42)
    /files/{rest:path}   -> files(rest="a/b/c.txt")
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Converter:
    """How one parameter type is matched and converted.

    ``greedy`` converters may span several segments; a route stops
    compiling segments after one.
    """

    pattern: str
    convert: Callable[[str], Any]
    greedy: bool = False


CONVERTERS: dict[str, Converter] = {
    "str": Converter(r"[^/]+", str),
    "int": Converter(r"\d+", int),
    "float": Converter(r"\d+(?:\.\d+)?", float),
    "path": Converter(r".+", str, greedy=True),
}


def convert_param(value: str, param_type: str) -> Any:
    """The prop value for a captured segment.

    The segment's regex has already accepted *value*, so conversion only
    fails for an unregistered *param_type* (``KeyError``).
    """
    return CONVERTERS[param_type].convert(value)
