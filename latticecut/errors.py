"""Error kinds raised by latticecut.

Every error derives from LatticeCutError so scripts can report any of them
with a single handler. Each also derives from the closest builtin so callers
that only know about ValueError/OSError still catch them.
"""
from __future__ import annotations

from typing import Optional


class LatticeCutError(Exception):
    """Base class for all latticecut errors."""


class PreconditionViolation(LatticeCutError, ValueError):
    """Requested window does not fit inside the source lattice."""


class EmptyCornerSet(LatticeCutError, ValueError):
    """Statistics requested with no corner alignments."""


class AlignmentParseError(LatticeCutError, ValueError):
    """Alignment token is not one of the known variants."""


class LatticeLayoutError(LatticeCutError, ValueError):
    """Record arrays do not form a square lattice of 5-record blocks."""


class MalformedRecord(LatticeCutError, ValueError):
    """A record line in a lattice file is missing or has a bad field."""

    def __init__(self, message: str, line_number: Optional[int] = None,
                 field: Optional[str] = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
        self.field = field


class IOFailure(LatticeCutError, OSError):
    """Reading or writing a lattice/statistics file failed."""
