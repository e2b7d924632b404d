#!/usr/bin/env python3
"""Mean and standard deviation of window energies over sampled corners.

Writes one line per size: mean<TAB>stddev<TAB>#size

Usage:
    python -m scripts.corner_statistics input.txt stats.txt --sizes 2 4 6
    python -m scripts.corner_statistics input.txt stats.txt --sizes 4 --corners left-top right-bottom
    python -m scripts.corner_statistics input.txt stats.txt --config run.json --json stats.json
"""
from __future__ import annotations

import argparse
import logging
import sys

from latticecut.errors import LatticeCutError
from latticecut.io.serialize import (
    StatisticsWriter,
    load_statistics_config,
    load_store,
    save_statistics_json,
)
from latticecut.sampling.corners import StatisticsConfig, iter_size_statistics

logger = logging.getLogger(__name__)


def build_config(args) -> StatisticsConfig:
    """Merge an optional JSON config with command-line overrides."""
    config = load_statistics_config(args.config) if args.config else StatisticsConfig()
    if args.sizes is not None:
        config.sizes = args.sizes
    if args.corners is not None:
        config.corners = args.corners
    if args.allow_full:
        config.strict = False
    if args.skip_invalid:
        config.skip_invalid = True
    return config


def main(argv=None):
    parser = argparse.ArgumentParser(description="Corner-sampled energy statistics")
    parser.add_argument("input", help="Source lattice file")
    parser.add_argument("output", help="Statistics table to write")
    parser.add_argument("--sizes", nargs="+", type=int, default=None,
                        help="Window edge lengths to sample")
    parser.add_argument("--corners", nargs="+", default=None,
                        help="Corner tokens like 'left-top', or 'all' (default: all 9)")
    parser.add_argument("--config", default=None,
                        help="JSON file with sizes, corners, strict, skip_invalid")
    parser.add_argument("--allow-full", action="store_true",
                        help="Allow windows as large as the whole lattice")
    parser.add_argument("--skip-invalid", action="store_true",
                        help="Skip sizes that do not fit instead of aborting")
    parser.add_argument("--json", default=None,
                        help="Also write per-corner energies as JSON")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log per-corner energies and block mapping")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        config = build_config(args)
        corners = config.resolved_corners()
        store = load_store(args.input)

        logger.info(
            f"Sampling sizes {config.sizes} at {len(corners)} corners "
            f"on a {store.side}x{store.side} lattice"
        )

        results = []
        with StatisticsWriter(args.output) as writer:
            for stat in iter_size_statistics(
                store, config.sizes, corners,
                strict=config.strict, skip_invalid=config.skip_invalid,
            ):
                writer.write(stat)
                results.append(stat)

        logger.info(f"Statistics for {len(results)} sizes saved to {args.output}")

        if args.json:
            save_statistics_json(args.json, results)
            logger.info(f"Per-corner energies saved to {args.json}")
    except LatticeCutError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
