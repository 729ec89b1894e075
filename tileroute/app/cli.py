#!/usr/bin/env python3
"""
tileroute-search: run Dijkstra, A* and Greedy Search on tile worlds.

Examples:
  tileroute-search i1                 search input/i1.png (or i1.json)
  tileroute-search i1 i2 --show       ... and show the solutions on screen
  tileroute-search --batch 3          search i1, i2 and i3
  tileroute-search -3 show            same as --batch 3 --show

For every world the solved grids are written to the output directory as
<world>_d.png (Dijkstra), <world>_a.png (A*) and <world>_g.png (Greedy).
"""

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from tileroute.app import settings
from tileroute.core.solver import ExperimentResults, Solver
from tileroute.core.strategies import REPORT_ORDER, SearchStrategy
from tileroute.core.tileworld import load_world, resolve_world, save_world
from tileroute.core.types import Grid, SearchResult, TileWorldError

logger = logging.getLogger(__name__)

# Search order; each algorithm gets its own freshly loaded grid.
SEARCH_ORDER = (SearchStrategy.DIJKSTRA, SearchStrategy.A_STAR, SearchStrategy.GREEDY)

_LEGACY_BATCH = re.compile(r"^-(\d+)$")

Solved = Tuple[str, Grid, SearchResult]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tileroute-search",
        description="Find least-cost routes across tile worlds with Dijkstra, A* and Greedy Search.",
        epilog="Examples: tileroute-search -2 | tileroute-search -3 show | tileroute-search myworld show",
    )
    p.add_argument("worlds", nargs="*", metavar="WORLD",
                   help="world names (i1, i1.png, maps/demo.json); '-N' searches i1..iN, 'show' implies --show")
    p.add_argument("--batch", type=int, metavar="N", help="search i1 .. iN")
    p.add_argument("--show", action="store_true", help="show the solutions on screen")
    p.add_argument("--input-dir", help="directory holding the worlds (env TILEROUTE_INPUT_DIR)")
    p.add_argument("--output-dir", help="directory for solved worlds (env TILEROUTE_OUTPUT_DIR)")
    p.add_argument("--print-path", action="store_true", help="also print each solution path")
    p.add_argument("--log-level", help="logging level (env TILEROUTE_LOG_LEVEL)")
    return p


def _expand_worlds(args: argparse.Namespace, parser: argparse.ArgumentParser) -> List[str]:
    names: List[str] = []
    batch = args.batch
    for w in args.worlds:
        m = _LEGACY_BATCH.match(w)
        if m:
            batch = int(m.group(1))
        elif w == "show":
            args.show = True
        else:
            names.append(w)
    if batch is not None:
        if batch < 1:
            parser.error("the number of worlds must be at least 1")
        names.extend(f"i{n}" for n in range(1, batch + 1))
    if not names:
        parser.error("at least one world (or -N / --batch N) expected")
    return names


def search(name: str, input_dir: Path, output_dir: Path) -> Tuple[ExperimentResults, List[Solved]]:
    """Search one world with all three algorithms, saving each solved grid."""
    path = resolve_world(name, input_dir)
    stem = Path(name).stem
    results = ExperimentResults()
    solved: List[Solved] = []
    for strategy in SEARCH_ORDER:
        grid = load_world(path)
        solver = Solver(grid, strategy)
        result = solver.solve()
        results.set(strategy, result)
        save_world(grid, output_dir / (stem + settings.OUTPUT_SUFFIX[solver.strategy.name]))
        solved.append((f"{stem} {solver.strategy.name}", grid, result))
        logger.info("%s %s: cost %s, %d nodes", stem, solver.strategy.name,
                    result.best_path_cost, result.nodes_expanded)
    return results, solved


def print_algorithm_result(label: str, info: Optional[SearchResult], print_path: bool = False) -> None:
    print(label)
    if info is None:
        print("No results found.")
        return
    print(f"#nodes: {info.nodes_expanded}")
    print(f"#path cost: {info.best_path_cost}")
    print(f"#time: {info.time_ns} nanoseconds")
    if print_path:
        print("\n------")
        print("SOLUTION PATH:")
        print("------\n")
        for x, y in info.solution_path:
            print(f"({x}, {y})")
        print("------\n")


def print_all_results(name: str, info: ExperimentResults, print_path: bool = False) -> None:
    print("#######################")
    print(f"Testcase: {name}")
    print("#######################")
    for i, strategy in enumerate(REPORT_ORDER):
        if i:
            print("-------------------------------------")
        print_algorithm_result(strategy.create().name, info.get(strategy), print_path)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    names = _expand_worlds(args, parser)

    try:
        settings.configure_logging(args.log_level)
    except ValueError as ex:
        parser.error(str(ex))

    in_dir = settings.input_dir(args.input_dir)
    out_dir = settings.output_dir(args.output_dir)

    failed = False
    to_show: List[Solved] = []
    for name in names:
        try:
            info, solved = search(name, in_dir, out_dir)
        except (TileWorldError, OSError) as ex:
            print(f"{name}: {ex}", file=sys.stderr)
            failed = True
            continue
        print_all_results(name, info, args.print_path)
        to_show.extend(solved)

    if args.show and to_show:
        from tileroute.app.viewer import show_solutions
        show_solutions(to_show)

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
