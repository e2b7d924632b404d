"""Record storage for square lattices of fixed-size site blocks.

A RecordStore holds one record per row in struct-of-arrays form. Records are
grouped in blocks of BLOCK_SIZE consecutive rows, one block per lattice
site, and sites are laid out in row-major order over a side x side grid:

    record index = (y * side + x) * BLOCK_SIZE + k,   k in [0, BLOCK_SIZE)
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

import numpy as np

from latticecut.errors import LatticeLayoutError

BLOCK_SIZE = 5


@dataclass(frozen=True)
class Record:
    """A single lattice record."""
    id: int
    position: Tuple[float, float, float]
    moment: Tuple[float, float, float]
    state: bool


def _frozen(array: np.ndarray) -> np.ndarray:
    array = np.array(array, copy=True)
    array.setflags(write=False)
    return array


class RecordStore:
    """Immutable, block-grouped collection of lattice records.

    Parameters
    ----------
    ids : array (n,) of int
    positions : array (n, 3) of float
    moments : array (n, 3) of float
    states : array (n,) of bool

    Raises
    ------
    LatticeLayoutError
        If shapes disagree, n is not a multiple of BLOCK_SIZE, or the
        number of sites is not a perfect square.
    """

    def __init__(self, ids, positions, moments, states):
        ids = np.asarray(ids, dtype=np.int64).reshape(-1)
        positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
        moments = np.asarray(moments, dtype=np.float64).reshape(-1, 3)
        states = np.asarray(states, dtype=bool).reshape(-1)

        n = len(ids)
        if not (len(positions) == len(moments) == len(states) == n):
            raise LatticeLayoutError(
                f"Field lengths disagree: ids={n}, positions={len(positions)}, "
                f"moments={len(moments)}, states={len(states)}"
            )
        if n % BLOCK_SIZE != 0:
            raise LatticeLayoutError(
                f"Record count {n} is not a multiple of the block size {BLOCK_SIZE}"
            )
        n_sites = n // BLOCK_SIZE
        side = math.isqrt(n_sites)
        if side * side != n_sites:
            raise LatticeLayoutError(
                f"Site count {n_sites} is not a perfect square"
            )

        self._ids = _frozen(ids)
        self._positions = _frozen(positions)
        self._moments = _frozen(moments)
        self._states = _frozen(states)
        self._side = side

    # --- constructors ---

    @classmethod
    def from_records(cls, records: Iterable[Record]) -> "RecordStore":
        records = list(records)
        return cls(
            ids=[r.id for r in records],
            positions=np.array([r.position for r in records], dtype=np.float64).reshape(-1, 3),
            moments=np.array([r.moment for r in records], dtype=np.float64).reshape(-1, 3),
            states=[r.state for r in records],
        )

    @classmethod
    def empty(cls) -> "RecordStore":
        return cls(np.zeros(0), np.zeros((0, 3)), np.zeros((0, 3)), np.zeros(0))

    def with_ids(self, ids) -> "RecordStore":
        """Return a copy of this store with identifiers replaced."""
        return RecordStore(ids, self._positions, self._moments, self._states)

    def take(self, indices, ids: Optional[np.ndarray] = None) -> "RecordStore":
        """Return a new store made of the records at ``indices``.

        ``indices`` must select whole blocks in the order they should appear.
        When ``ids`` is None the original identifiers are kept.
        """
        indices = np.asarray(indices, dtype=np.int64)
        return RecordStore(
            self._ids[indices] if ids is None else ids,
            self._positions[indices],
            self._moments[indices],
            self._states[indices],
        )

    # --- fields ---

    @property
    def ids(self) -> np.ndarray:
        return self._ids

    @property
    def positions(self) -> np.ndarray:
        return self._positions

    @property
    def moments(self) -> np.ndarray:
        return self._moments

    @property
    def states(self) -> np.ndarray:
        return self._states

    @property
    def n_records(self) -> int:
        return len(self._ids)

    @property
    def n_sites(self) -> int:
        return self.n_records // BLOCK_SIZE

    @property
    def side(self) -> int:
        """Edge length of the square site grid."""
        return self._side

    @property
    def block_positions(self) -> np.ndarray:
        """Positions reshaped to (n_sites, BLOCK_SIZE, 3)."""
        return self._positions.reshape(self.n_sites, BLOCK_SIZE, 3)

    @property
    def block_moments(self) -> np.ndarray:
        """Moments reshaped to (n_sites, BLOCK_SIZE, 3)."""
        return self._moments.reshape(self.n_sites, BLOCK_SIZE, 3)

    def block(self, site: int) -> Tuple[Record, ...]:
        """The BLOCK_SIZE records of one site."""
        if not 0 <= site < self.n_sites:
            raise IndexError(f"Site {site} out of range for {self.n_sites} sites")
        start = site * BLOCK_SIZE
        return tuple(self[i] for i in range(start, start + BLOCK_SIZE))

    def state_string(self) -> str:
        """Per-record state flags as a string of '0'/'1'."""
        return "".join("1" if s else "0" for s in self._states)

    # --- sequence protocol ---

    def __len__(self) -> int:
        return self.n_records

    def __getitem__(self, index: int) -> Record:
        if index < 0:
            index += self.n_records
        if not 0 <= index < self.n_records:
            raise IndexError(f"Record {index} out of range for {self.n_records} records")
        return Record(
            id=int(self._ids[index]),
            position=tuple(float(v) for v in self._positions[index]),
            moment=tuple(float(v) for v in self._moments[index]),
            state=bool(self._states[index]),
        )

    def __iter__(self) -> Iterator[Record]:
        for i in range(self.n_records):
            yield self[i]

    def __eq__(self, other) -> bool:
        if not isinstance(other, RecordStore):
            return NotImplemented
        return (
            np.array_equal(self._ids, other._ids)
            and np.array_equal(self._positions, other._positions)
            and np.array_equal(self._moments, other._moments)
            and np.array_equal(self._states, other._states)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"RecordStore(n_records={self.n_records}, n_sites={self.n_sites}, "
            f"side={self.side})"
        )
