"""Base classes for synthetic lattice generation.

SiteMotif defines the records placed inside one lattice site.
SiteLatticeGenerator tiles the motif over a side x side square grid and
returns a RecordStore in row-major site order.
"""
from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from latticecut.errors import LatticeLayoutError
from latticecut.records.store import BLOCK_SIZE, RecordStore


@dataclass
class SiteMotif:
    """Definition of the records inside one lattice site.

    Attributes:
        offsets: Fractional (x, y) positions of the records within the site,
            one per record in block order.
        moments: Moment vector of each record, same order as ``offsets``.
        height: z coordinate shared by all records.
    """
    offsets: List[Tuple[float, float]]
    moments: List[Tuple[float, float, float]]
    height: float = 0.0


class SiteLatticeGenerator(abc.ABC):
    """Base class for generators that tile a motif over a square grid."""

    name: str = "base"

    @abc.abstractmethod
    def _define_motif(self) -> SiteMotif:
        """Return the site motif for this lattice type."""
        ...

    def build(
        self,
        side: int,
        spacing: float = 1.0,
        seed: Optional[int] = None,
    ) -> RecordStore:
        """Tile the motif and construct the full lattice.

        Args:
            side: Number of sites along each edge.
            spacing: Distance between neighbouring site origins.
            seed: If given, record states are drawn at random with this
                seed; otherwise every state is False.

        Returns:
            RecordStore with side * side * BLOCK_SIZE records.
        """
        motif = self._define_motif()
        if len(motif.offsets) != BLOCK_SIZE or len(motif.moments) != BLOCK_SIZE:
            raise LatticeLayoutError(
                f"Motif '{self.name}' must define exactly {BLOCK_SIZE} records"
            )
        if side < 0:
            raise LatticeLayoutError(f"Lattice side must be non-negative, got {side}")

        offsets = np.array(motif.offsets, dtype=np.float64)
        moments = np.array(motif.moments, dtype=np.float64)
        n_records = side * side * BLOCK_SIZE

        # --- Site origins in row-major order: site = y * side + x ---
        ys, xs = np.divmod(np.arange(side * side), side)
        origins = np.column_stack((xs, ys)).astype(np.float64) * spacing

        positions = np.zeros((side * side, BLOCK_SIZE, 3))
        positions[:, :, :2] = origins[:, None, :] + offsets[None, :, :] * spacing
        positions[:, :, 2] = motif.height

        block_moments = np.broadcast_to(moments, (side * side, BLOCK_SIZE, 3))

        if seed is None:
            states = np.zeros(n_records, dtype=bool)
        else:
            rng = np.random.default_rng(seed)
            states = rng.random(n_records) < 0.5

        return RecordStore(
            ids=np.arange(n_records),
            positions=positions.reshape(-1, 3),
            moments=block_moments.reshape(-1, 3),
            states=states,
        )
