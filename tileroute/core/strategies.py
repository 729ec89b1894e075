#!/usr/bin/env python3
"""
Priority rules for the shared search engine.

The engine is the same for every algorithm; only the frontier ordering differs:
- Dijkstra: tentative cost g (heuristic forced to 0).
- A*:       g + h, with h the octile distance to the goal.
- Greedy:   h only; g is ignored for ordering.

The octile heuristic is costed at Road rates (10 straight, 14 diagonal). It is
admissible and consistent as long as no terrain is cheaper than Road.
"""

from enum import Enum
from typing import Dict, Tuple, Union

from tileroute.core.graph import GraphNode
from tileroute.core.types import ROAD_COST, ROAD_DIAGONAL_COST


def octile_distance(node: GraphNode, goal: GraphNode) -> int:
    dx = abs(goal.x - node.x)
    dy = abs(goal.y - node.y)
    diag = min(dx, dy)
    return diag * ROAD_DIAGONAL_COST + (dx + dy - 2 * diag) * ROAD_COST


class PriorityStrategy:
    name = "?"
    short = "?"

    def heuristic(self, node: GraphNode, goal: GraphNode) -> float:
        return octile_distance(node, goal)

    def priority(self, node: GraphNode) -> float:
        raise NotImplementedError

    def compare(self, a: GraphNode, b: GraphNode) -> int:
        """Comparator form of priority(): -1, 0 or 1."""
        pa, pb = self.priority(a), self.priority(b)
        return (pa > pb) - (pa < pb)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Dijkstra(PriorityStrategy):
    name = "Dijkstra"
    short = "d"

    def heuristic(self, node: GraphNode, goal: GraphNode) -> float:
        return 0

    def priority(self, node: GraphNode) -> float:
        return node.tentative_cost


class AStar(PriorityStrategy):
    name = "A*"
    short = "a"

    def priority(self, node: GraphNode) -> float:
        return node.tentative_cost + node.heuristic_cost


class Greedy(PriorityStrategy):
    name = "Greedy Search"
    short = "g"

    def priority(self, node: GraphNode) -> float:
        return node.heuristic_cost

    def compare(self, a: GraphNode, b: GraphNode) -> int:
        # Equal heuristics rank the first operand lower. Not antisymmetric;
        # the engine orders ties by insertion instead of calling this.
        if a.heuristic_cost > b.heuristic_cost:
            return 1
        return -1


class SearchStrategy(Enum):
    A_STAR = "a_star"
    DIJKSTRA = "dijkstra"
    GREEDY = "greedy"

    def create(self) -> PriorityStrategy:
        return _STRATEGY_CLASSES[self]()


_STRATEGY_CLASSES = {
    SearchStrategy.A_STAR: AStar,
    SearchStrategy.DIJKSTRA: Dijkstra,
    SearchStrategy.GREEDY: Greedy,
}


_ALIASES: Dict[str, SearchStrategy] = {
    "a": SearchStrategy.A_STAR, "a*": SearchStrategy.A_STAR,
    "astar": SearchStrategy.A_STAR, "a_star": SearchStrategy.A_STAR,
    "d": SearchStrategy.DIJKSTRA, "dijkstra": SearchStrategy.DIJKSTRA,
    "g": SearchStrategy.GREEDY, "greedy": SearchStrategy.GREEDY,
    "greedy search": SearchStrategy.GREEDY,
}


def strategy_for(name: str) -> PriorityStrategy:
    """Look up a strategy by name or alias ("a*", "dijkstra", "g", ...)."""
    try:
        return _ALIASES[name.strip().lower()].create()
    except KeyError:
        raise ValueError(f"unknown search strategy: {name!r}") from None


def as_strategy(strategy: Union[PriorityStrategy, SearchStrategy, str]) -> PriorityStrategy:
    if isinstance(strategy, PriorityStrategy):
        return strategy
    if isinstance(strategy, SearchStrategy):
        return strategy.create()
    return strategy_for(strategy)


# Report order used by the command line and the viewer.
REPORT_ORDER: Tuple[SearchStrategy, ...] = (
    SearchStrategy.A_STAR, SearchStrategy.DIJKSTRA, SearchStrategy.GREEDY,
)
