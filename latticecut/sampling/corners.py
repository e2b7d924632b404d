"""Energy statistics of sub-lattices sampled at several corners.

For each requested window size, the window is cut at every requested corner
alignment and the dipolar energy of each cut is computed. The per-size
result is the mean and population standard deviation of those energies.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np

from latticecut.errors import EmptyCornerSet, PreconditionViolation
from latticecut.geometry.alignment import ALL_CORNERS, Corner, parse_corners
from latticecut.geometry.window import check_window_size, extract_corner
from latticecut.physics.dipolar import energy
from latticecut.records.store import RecordStore

logger = logging.getLogger(__name__)


@dataclass
class StatisticsConfig:
    """Configuration for a corner statistics run."""

    sizes: List[int] = field(default_factory=list)
    corners: List[str] = field(default_factory=lambda: [c.token for c in ALL_CORNERS])
    strict: bool = True  # Require size < lattice side
    skip_invalid: bool = False  # Log and skip sizes that do not fit instead of aborting

    def resolved_corners(self) -> List[Corner]:
        return parse_corners(self.corners)


@dataclass
class SizeStatistic:
    """Energy statistics over all sampled corners for one window size."""

    size: int
    mean_energy: float
    stddev_energy: float
    energies: List[float] = field(default_factory=list)  # one per corner, corner order


def summarize_energies(energies: Sequence[float]) -> Tuple[float, float]:
    """Mean and population standard deviation (divisor n, not n - 1).

    Raises:
        EmptyCornerSet: If ``energies`` is empty.
    """
    if len(energies) == 0:
        raise EmptyCornerSet("Cannot summarize energies of zero corners")
    values = np.asarray(energies, dtype=np.float64)
    return float(np.mean(values)), float(np.std(values))


def corner_energies(
    store: RecordStore,
    size: int,
    corners: Sequence[Corner],
    strict: bool = True,
) -> List[float]:
    """Energy of the size x size window at each corner, in corner order."""
    energies = []
    for corner in corners:
        e = energy(extract_corner(store, size, corner, strict=strict))
        logger.debug(f"size={size} corner={corner.token}: energy={e:.10g}")
        energies.append(e)
    return energies


def iter_size_statistics(
    store: RecordStore,
    sizes: Iterable[int],
    corners: Sequence[Corner],
    strict: bool = True,
    skip_invalid: bool = False,
) -> Iterator[SizeStatistic]:
    """Yield one SizeStatistic per size, in the order of ``sizes``.

    Parameters
    ----------
    store : RecordStore
    sizes : window edge lengths to sample
    corners : corner alignments applied to every size
    strict : require every size to be smaller than the lattice side
    skip_invalid : log and skip sizes that fail the window precondition
        instead of raising

    Raises
    ------
    EmptyCornerSet
        If ``corners`` is empty.
    PreconditionViolation
        If a size does not fit and ``skip_invalid`` is False.
    """
    corners = list(corners)
    if not corners:
        raise EmptyCornerSet("At least one corner alignment is required")

    for size in sizes:
        try:
            check_window_size(store.side, size, strict=strict)
        except PreconditionViolation as e:
            if not skip_invalid:
                raise
            logger.error(f"Skipping size {size}: {e}")
            continue

        t0 = time.perf_counter()
        energies = corner_energies(store, size, corners, strict=strict)
        mean, std = summarize_energies(energies)
        logger.info(
            f"size={size}: mean={mean:.10g}, std={std:.10g} "
            f"over {len(corners)} corners ({time.perf_counter() - t0:.2f}s)"
        )
        yield SizeStatistic(size=size, mean_energy=mean, stddev_energy=std,
                            energies=energies)


def aggregate(
    store: RecordStore,
    sizes: Iterable[int],
    corners: Sequence[Corner],
    strict: bool = True,
    skip_invalid: bool = False,
) -> List[SizeStatistic]:
    """List form of :func:`iter_size_statistics`."""
    return list(iter_size_statistics(
        store, sizes, corners, strict=strict, skip_invalid=skip_invalid,
    ))


def aggregate_config(store: RecordStore, config: StatisticsConfig) -> List[SizeStatistic]:
    """Run :func:`aggregate` with the settings of ``config``."""
    return aggregate(
        store,
        config.sizes,
        config.resolved_corners(),
        strict=config.strict,
        skip_invalid=config.skip_invalid,
    )
