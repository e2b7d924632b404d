#!/usr/bin/env python3
"""Write a synthetic lattice file.

Usage:
    python -m scripts.generate_lattice lattice.txt --side 8
    python -m scripts.generate_lattice lattice.txt --side 8 --motif pinwheel --seed 42
"""
from __future__ import annotations

import argparse
import logging
import sys

from latticecut.errors import LatticeCutError
from latticecut.io.serialize import save_store
from latticecut.lattices.registry import get_generator, list_lattices

logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate a synthetic lattice file")
    parser.add_argument("output", help="Lattice file to write")
    parser.add_argument("--side", type=int, required=True, help="Sites along each edge")
    parser.add_argument("--motif", default="square", choices=list_lattices())
    parser.add_argument("--spacing", type=float, default=1.0)
    parser.add_argument("--seed", type=int, default=None,
                        help="Randomize record states with this seed")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        store = get_generator(args.motif).build(args.side, spacing=args.spacing, seed=args.seed)
        save_store(args.output, store)
    except LatticeCutError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
