"""Window alignments: where a sub-lattice is cut from the source lattice.

Horizontal alignment picks the row range, vertical alignment the column
range. A Corner pairs the two and is written as "<horizontal>-<vertical>",
e.g. "left-top" or "center-center".
"""
from __future__ import annotations

from enum import Enum
from typing import List, NamedTuple

from latticecut.errors import AlignmentParseError


class Horizontal(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Vertical(Enum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


class Corner(NamedTuple):
    horizontal: Horizontal
    vertical: Vertical

    @property
    def token(self) -> str:
        return f"{self.horizontal.value}-{self.vertical.value}"


ALL_CORNERS: List[Corner] = [
    Corner(h, v) for h in Horizontal for v in Vertical
]


def _variants(enum_cls) -> str:
    return ", ".join(member.value for member in enum_cls)


def parse_horizontal(token: str) -> Horizontal:
    """Parse 'left', 'center' or 'right'."""
    try:
        return Horizontal(token.strip().lower())
    except ValueError:
        raise AlignmentParseError(
            f"Unknown horizontal alignment '{token}'. Expected one of: {_variants(Horizontal)}"
        ) from None


def parse_vertical(token: str) -> Vertical:
    """Parse 'top', 'center' or 'bottom'."""
    try:
        return Vertical(token.strip().lower())
    except ValueError:
        raise AlignmentParseError(
            f"Unknown vertical alignment '{token}'. Expected one of: {_variants(Vertical)}"
        ) from None


def parse_corner(token: str) -> Corner:
    """Parse a "<horizontal>-<vertical>" token into a Corner.

    A bare "center" is accepted as "center-center".

    Raises:
        AlignmentParseError: If either half is not a known variant.
    """
    text = token.strip().lower()
    if text == "center":
        return Corner(Horizontal.CENTER, Vertical.CENTER)
    parts = text.split("-")
    if len(parts) != 2:
        raise AlignmentParseError(
            f"Corner token '{token}' must look like '<horizontal>-<vertical>', "
            f"e.g. 'left-top'"
        )
    return Corner(parse_horizontal(parts[0]), parse_vertical(parts[1]))


def parse_corners(tokens) -> List[Corner]:
    """Parse a list of corner tokens; 'all' expands to every corner."""
    corners = []
    for token in tokens:
        if token.strip().lower() == "all":
            corners.extend(ALL_CORNERS)
        else:
            corners.append(parse_corner(token))
    return corners
