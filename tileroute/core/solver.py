#!/usr/bin/env python3
from dataclasses import dataclass
import time
from typing import Optional, Union

from tileroute.core.engine import SearchEngine
from tileroute.core.graph import NodeGraph, build_graph
from tileroute.core.strategies import PriorityStrategy, SearchStrategy, as_strategy
from tileroute.core.types import Grid, SearchResult, MissingEndpointError


class Solver:
    """
    One algorithm on one grid.

    Builds its own node graph from the grid, so every Solver is independent.
    The solution path is painted back onto the grid (as PATH tiles) when End is
    reached, ready to be saved or shown.
    """

    def __init__(self, grid: Grid, strategy: Union[PriorityStrategy, SearchStrategy, str]):
        start = grid.find_start()
        end = grid.find_end()
        if start is None:
            raise MissingEndpointError(f"tile world {grid.name or '<unnamed>'!r} has no Start tile")
        if end is None:
            raise MissingEndpointError(f"tile world {grid.name or '<unnamed>'!r} has no End tile")

        self.grid = grid
        self.strategy = as_strategy(strategy)
        self.graph: NodeGraph = build_graph(grid)
        self.engine = SearchEngine(self.graph, self.graph[start], self.graph[end], self.strategy,
                                   on_path=lambda node: grid.mark_path(node.cell))

    def solve(self) -> SearchResult:
        """Run the search from scratch. Each call returns a new result."""
        t0 = time.perf_counter_ns()
        self.engine.reset()
        result = self.engine.run()
        result.time_ns = time.perf_counter_ns() - t0
        return result


@dataclass
class ExperimentResults:
    """Results of all three algorithms on one tile world."""
    dijkstra: Optional[SearchResult] = None
    a_star: Optional[SearchResult] = None
    greedy: Optional[SearchResult] = None

    def get(self, strategy: SearchStrategy) -> Optional[SearchResult]:
        return {
            SearchStrategy.DIJKSTRA: self.dijkstra,
            SearchStrategy.A_STAR: self.a_star,
            SearchStrategy.GREEDY: self.greedy,
        }[strategy]

    def set(self, strategy: SearchStrategy, result: SearchResult) -> None:
        if strategy is SearchStrategy.DIJKSTRA:
            self.dijkstra = result
        elif strategy is SearchStrategy.A_STAR:
            self.a_star = result
        else:
            self.greedy = result
