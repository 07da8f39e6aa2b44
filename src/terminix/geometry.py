"""Window geometry descriptor parsing (``WxH`` or ``WxH+X+Y``)."""

from __future__ import annotations

import logging as py_logging
import re
from dataclasses import dataclass

logger = py_logging.getLogger(__name__)

_GEOMETRY_FULL = re.compile(r"(?P<width>\d+)x(?P<height>\d+)(?P<x>[-+]\d+)(?P<y>[-+]\d+)")
_GEOMETRY_DIMENSIONS = re.compile(r"(?P<width>\d+)x(?P<height>\d+)")


@dataclass(frozen=True)
class Geometry:
    width: int
    height: int
    x: int = 0
    y: int = 0

    def __str__(self) -> str:
        return f"{self.width}x{self.height} {self.x},{self.y}"


def parse_geometry(text: str) -> Geometry | None:
    logger.debug("Parsing geometry string %s", text)
    # Full form first: the dimensions pattern also matches its prefix.
    match = _GEOMETRY_FULL.search(text)
    if match:
        return Geometry(
            width=int(match["width"]),
            height=int(match["height"]),
            x=int(match["x"]),
            y=int(match["y"]),
        )

    match = _GEOMETRY_DIMENSIONS.search(text)
    if match:
        return Geometry(width=int(match["width"]), height=int(match["height"]))

    logger.error("Geometry string '%s' is invalid and could not be parsed", text)
    return None
