"""Command-line interface: load prototypes, collapse a board, print it."""

from __future__ import annotations

import argparse
import random
import sys

from tilecollapse.config import CFG
from tilecollapse.core.csp import Solver
from tilecollapse.core.grid import Grid
from tilecollapse.io import parser
from tilecollapse.io.render import TerminalRenderer, render_grid
from tilecollapse.logging_config import setup_logging


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Wave function collapse tile board generator")
    ap.add_argument("rules", nargs="?", default=CFG.RULES, help="Path to tile prototypes (JSON or YAML)")
    ap.add_argument("--rows", type=int, default=CFG.ROWS, help="Board height in cells")
    ap.add_argument("--cols", type=int, default=CFG.COLS, help="Board width in cells")
    ap.add_argument("--seed", type=int, default=None, help="Seed for reproducible boards")
    ap.add_argument("--animate", action="store_true", help="Redraw the board after every placement")
    ap.add_argument("--delay", type=float, default=CFG.RENDER_DELAY, help="Pause after each animated frame (s)")
    ap.add_argument("--interval", type=float, default=CFG.RENDER_INTERVAL, help="Minimum gap between animated frames (s)")
    ap.add_argument("--node-limit", type=int, default=CFG.NODE_LIMIT, help="Give up after this many placements (0 = never)")
    ap.add_argument("--log-level", default=CFG.LOG_LEVEL, help="Logging level (DEBUG, INFO, WARNING, ...)")
    return ap


def main(argv: list[str] | None = None) -> int:
    ap = build_arg_parser()
    args = ap.parse_args(argv)
    if args.rows <= 0 or args.cols <= 0:
        ap.error("--rows and --cols must be positive")

    try:
        setup_logging(args.log_level)
    except ValueError as exc:
        ap.error(str(exc))

    try:
        rules = parser.load_rules(args.rules)
    except parser.ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    renderer = None
    if args.animate:
        renderer = TerminalRenderer(min_interval=args.interval, delay=args.delay)

    grid = Grid(rules, args.rows, args.cols)
    solver = Solver(rules, rng=random.Random(args.seed), renderer=renderer, node_limit=args.node_limit)
    ok = solver.run(grid)

    if renderer is not None:
        renderer.final(grid)
    else:
        print(render_grid(grid))

    stats = solver.stats
    status = "solved" if ok else ("gave up" if stats.aborted else "no solution")
    print(
        f"{status}: {args.rows}x{args.cols} with {len(rules)} tiles, "
        f"{stats.placements} placements, {stats.backtracks} backtracks in {stats.elapsed:.2f}s"
    )
    return 0 if ok else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
