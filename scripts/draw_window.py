#!/usr/bin/env python3
"""Render a lattice file with an extraction window outlined.

Usage:
    python -m scripts.draw_window lattice.txt window.png 4 --corner left-top
"""
from __future__ import annotations

import argparse
import logging
import sys

from latticecut.errors import LatticeCutError
from latticecut.geometry.alignment import parse_corner
from latticecut.io.serialize import load_store
from latticecut.viz.window_drawing import save_window_figure

logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Draw an extraction window")
    parser.add_argument("input", help="Source lattice file")
    parser.add_argument("figure", help="Image file to write (.png, .pdf, ...)")
    parser.add_argument("size", type=int, help="Window edge length in sites")
    parser.add_argument("--corner", default="center-center")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        store = load_store(args.input)
        path = save_window_figure(args.figure, store, args.size, parse_corner(args.corner))
        logger.info(f"Figure saved to {path}")
    except LatticeCutError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
