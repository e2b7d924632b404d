"""Sub-lattice extraction.

Selects a size x size window of sites from a side x side lattice and repacks
the selected blocks into a new RecordStore:

    source block start      = (y * side + x) * 5
    destination block start = ((y - y0) * size + (x - x0)) * 5

Rows y come from the horizontal alignment, columns x from the vertical
alignment. Centered windows start at side//2 - size//2, so for odd sizes
the extra cell falls on the high-index side.
"""
from __future__ import annotations

import logging
from typing import NamedTuple, Tuple, Union

import numpy as np

from latticecut.errors import PreconditionViolation
from latticecut.geometry.alignment import Corner, Horizontal, Vertical
from latticecut.records.store import BLOCK_SIZE, RecordStore

logger = logging.getLogger(__name__)

Alignment = Union[Horizontal, Vertical]


class Window(NamedTuple):
    """Half-open row range [y0, y1) and column range [x0, x1)."""
    y0: int
    y1: int
    x0: int
    x1: int

    @property
    def size(self) -> int:
        return self.y1 - self.y0


def axis_bounds(side: int, size: int, alignment: Alignment) -> Tuple[int, int]:
    """Half-open index range of length ``size`` along one axis."""
    if alignment in (Horizontal.LEFT, Vertical.TOP):
        return 0, size
    if alignment in (Horizontal.RIGHT, Vertical.BOTTOM):
        return side - size, side
    center = side // 2
    offset = size // 2
    if size % 2 == 0:
        return center - offset, center + offset
    return center - offset, center + offset + 1


def window_bounds(side: int, size: int, corner: Corner) -> Window:
    """Row and column ranges selected by ``corner`` on a side x side grid."""
    y0, y1 = axis_bounds(side, size, corner.horizontal)
    x0, x1 = axis_bounds(side, size, corner.vertical)
    return Window(y0, y1, x0, x1)


def window_sites(side: int, window: Window) -> np.ndarray:
    """Source site indices covered by ``window``, in row-major order."""
    ys = np.arange(window.y0, window.y1)
    xs = np.arange(window.x0, window.x1)
    return (ys[:, None] * side + xs[None, :]).reshape(-1)


def window_record_indices(side: int, window: Window) -> np.ndarray:
    """Source record indices covered by ``window``, block-local order kept."""
    sites = window_sites(side, window)
    return (sites[:, None] * BLOCK_SIZE + np.arange(BLOCK_SIZE)[None, :]).reshape(-1)


def check_window_size(side: int, size: int, strict: bool = True) -> None:
    """Raise PreconditionViolation unless a size x size window fits.

    With ``strict`` the window must be strictly smaller than the lattice;
    otherwise a window covering the whole lattice is also accepted.
    """
    if size < 1:
        raise PreconditionViolation(f"Window size must be positive, got {size}")
    if strict and not side > size:
        raise PreconditionViolation(
            f"Window size {size} must be smaller than the lattice side {side}"
        )
    if size > side:
        raise PreconditionViolation(
            f"Window size {size} exceeds the lattice side {side}"
        )


def extract(
    store: RecordStore,
    size: int,
    horizontal: Horizontal,
    vertical: Vertical,
    strict: bool = True,
) -> RecordStore:
    """Cut a size x size sub-lattice out of ``store``.

    Parameters
    ----------
    store : RecordStore
        Source lattice; never modified.
    size : int
        Edge length of the window, in sites.
    horizontal, vertical : alignment of the window rows and columns.
    strict : bool
        Require ``size < store.side``. With ``strict=False`` a window equal
        to the whole lattice is allowed.

    Returns
    -------
    RecordStore
        ``size * size * 5`` records in row-major window order, identifiers
        renumbered ``0 .. size*size*5 - 1``.

    Raises
    ------
    PreconditionViolation
        If the window does not fit.
    """
    side = store.side
    check_window_size(side, size, strict=strict)

    window = window_bounds(side, size, Corner(horizontal, vertical))
    indices = window_record_indices(side, window)

    if logger.isEnabledFor(logging.DEBUG):
        for block, source_start in enumerate(indices[::BLOCK_SIZE]):
            logger.debug(
                f"block {block}: source={int(source_start)} -> "
                f"destination={block * BLOCK_SIZE}"
            )

    logger.debug(
        f"Extracting {size}x{size} window {window} from {side}x{side} lattice"
    )
    return store.take(indices, ids=np.arange(len(indices), dtype=np.int64))


def extract_corner(
    store: RecordStore,
    size: int,
    corner: Corner,
    strict: bool = True,
) -> RecordStore:
    """``extract`` with both alignments given as a Corner."""
    return extract(store, size, corner.horizontal, corner.vertical, strict=strict)
