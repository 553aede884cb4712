#!/usr/bin/env python3
"""Benchmark full vs incremental render grouping.

Replays a seeded random sequence of single-cell paints and times
recomputing the grouping from scratch (``group``) against updating it in
place (``IncrementalGrouping``). Every step also checks that both produce
identical output, so this doubles as an equivalence soak test.

Usage:
    python -m glyphgrid.scripts.bench_batching             # 30x10, 2000 paints
    python -m glyphgrid.scripts.bench_batching -r 200 -c 200 -n 500
"""

import argparse
import random
import statistics
import time

from glyphgrid.engine.batching import IncrementalGrouping, group
from glyphgrid.engine.grid import GridModel
from glyphgrid.engine.types import DEFAULT_COLS, DEFAULT_ROWS


def main():
    parser = argparse.ArgumentParser(
        description="Benchmark full vs incremental render grouping"
    )
    parser.add_argument(
        "-r", "--rows", type=int, default=DEFAULT_ROWS, help="Grid rows"
    )
    parser.add_argument(
        "-c", "--cols", type=int, default=DEFAULT_COLS, help="Grid columns"
    )
    parser.add_argument(
        "-n",
        "--paints",
        type=int,
        default=2000,
        help="Number of single-cell paints (default: 2000)",
    )
    parser.add_argument(
        "-t", "--tiles", type=int, default=22, help="Tile types (default: 22)"
    )
    parser.add_argument("--seed", type=int, default=1, help="Random seed")
    args = parser.parse_args()

    rng = random.Random(args.seed)
    grid = GridModel.create(args.rows, args.cols, tile_count=args.tiles)
    grouping = IncrementalGrouping(grid)

    print(
        f"Benchmark: {args.rows}x{args.cols} grid, {args.tiles} tile types, "
        f"{args.paints} paints, seed={args.seed}"
    )

    full_us = []
    incr_us = []
    for _ in range(args.paints):
        row = rng.randrange(args.rows)
        col = rng.randrange(args.cols)
        tile_id = rng.randrange(args.tiles)
        old = grid.get(row, col)
        grid = grid.set(row, col, tile_id)

        start = time.perf_counter()
        expected = group(grid)
        full_us.append((time.perf_counter() - start) * 1e6)

        start = time.perf_counter()
        grouping.move(row, col, old, tile_id)
        actual = grouping.groups()
        incr_us.append((time.perf_counter() - start) * 1e6)

        if actual != expected:
            raise SystemExit(
                f"Incremental grouping diverged after painting "
                f"({row}, {col}) with tile {tile_id}"
            )

    print()
    print(f"Full:        median {statistics.median(full_us):.1f} us")
    print(f"Incremental: median {statistics.median(incr_us):.1f} us")
    print("Groupings identical at every step.")


if __name__ == "__main__":
    main()
