#!/usr/bin/env python3
"""
Node graph for one search run.

A NodeGraph is an owned arena: one GraphNode per grid cell, holding the mutable
search state (tentative cost, heuristic, visited flag, predecessor) plus the
straight and diagonal neighbour lists computed once by build_graph().

Search state is mutated in place, so every run needs its own graph. Build a new
one per algorithm; never share a graph between runs.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from tileroute.core.types import Cell, Grid, TerrainType, INFINITY

# Row-major order within each class; matches a full pairwise scan of the grid.
STRAIGHT_OFFSETS: Tuple[Tuple[int, int], ...] = ((0, -1), (-1, 0), (1, 0), (0, 1))
DIAGONAL_OFFSETS: Tuple[Tuple[int, int], ...] = ((-1, -1), (1, -1), (-1, 1), (1, 1))


@dataclass(eq=False)
class GraphNode:
    x: int
    y: int
    terrain: TerrainType
    tentative_cost: float = INFINITY
    heuristic_cost: float = 0
    visited: bool = False
    predecessor: Optional["GraphNode"] = field(default=None, repr=False)
    straight_neighbors: List["GraphNode"] = field(default_factory=list, repr=False)
    diagonal_neighbors: List["GraphNode"] = field(default_factory=list, repr=False)

    @property
    def cell(self) -> Cell:
        return (self.x, self.y)

    @property
    def total_cost(self) -> float:
        return self.tentative_cost + self.heuristic_cost

    def is_straight_adjacent_to(self, other: "GraphNode") -> bool:
        return other in self.straight_neighbors

    def is_diagonally_adjacent_to(self, other: "GraphNode") -> bool:
        return other in self.diagonal_neighbors

    def cost_to(self, other: "GraphNode") -> float:
        """Cost of stepping from this node onto `other`; INFINITY if not a neighbour."""
        if self.is_diagonally_adjacent_to(other):
            return other.terrain.diagonal_cost
        if self.is_straight_adjacent_to(other):
            return other.terrain.cost
        return INFINITY

    def neighbors(self) -> List["GraphNode"]:
        return self.straight_neighbors + self.diagonal_neighbors

    def unvisited_neighbors(self) -> List["GraphNode"]:
        return [n for n in self.neighbors() if not n.visited]

    def reset(self) -> None:
        self.tentative_cost = INFINITY
        self.heuristic_cost = 0
        self.visited = False
        self.predecessor = None

    def __str__(self) -> str:
        return (f"Node {{ ({self.x}, {self.y}) cost = {self.tentative_cost}, "
                f"heuristic = {self.heuristic_cost}, total = {self.total_cost} }}")


@dataclass
class NodeGraph:
    width: int
    height: int
    nodes: Dict[Cell, GraphNode] = field(default_factory=dict)

    def __getitem__(self, c: Cell) -> GraphNode:
        return self.nodes[c]

    def __iter__(self) -> Iterator[GraphNode]:
        # dict preserves insertion order, which build_graph keeps row-major
        return iter(self.nodes.values())

    def __len__(self) -> int:
        return len(self.nodes)


def _adjacent(grid: Grid, x: int, y: int, offsets) -> List[Cell]:
    out: List[Cell] = []
    for dx, dy in offsets:
        n = (x + dx, y + dy)
        if grid.in_bounds(n) and grid.terrain_at(n).walkable:
            out.append(n)
    return out


def build_graph(grid: Grid) -> NodeGraph:
    """
    Build a fresh node graph from the grid.

    Each walkable cell gets its straight and diagonal neighbours by checking the
    (up to) eight coordinate-adjacent cells. Non-walkable and unknown cells get
    nodes but no neighbours, and never appear in anyone's neighbour list.
    """
    graph = NodeGraph(grid.width, grid.height)
    for y in range(grid.height):
        for x in range(grid.width):
            graph.nodes[(x, y)] = GraphNode(x, y, grid.cells[y][x])

    for node in graph:
        if not node.terrain.walkable:
            continue
        node.straight_neighbors = [graph.nodes[c] for c in _adjacent(grid, node.x, node.y, STRAIGHT_OFFSETS)]
        node.diagonal_neighbors = [graph.nodes[c] for c in _adjacent(grid, node.x, node.y, DIAGONAL_OFFSETS)]
    return graph
